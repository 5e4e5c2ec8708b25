"""
Subscription plan catalog

Plans are static: ordered free < starter < organisation. A limit of None
means unlimited.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .entities.enums import BillingCycle, PlanName

# Limited actions and the usage counter each one is measured against
CREATE_CHURCH = "create_church"
CREATE_CAMPAIGN = "create_campaign"
ADD_ADMIN_STAFF = "add_admin_staff"
CREATE_VOLUNTEER_TEAM = "create_volunteer_team"

LIMITED_ACTIONS: Tuple[str, ...] = (
    CREATE_CHURCH,
    CREATE_CAMPAIGN,
    ADD_ADMIN_STAFF,
    CREATE_VOLUNTEER_TEAM,
)

# Generic actions
MAKE_DONATIONS = "make_donations"
BE_ADDED_TO_CHURCH = "be_added_to_church"

# Generic actions always available on the free tier
FREE_TIER_ACTIONS = frozenset({MAKE_DONATIONS, BE_ADDED_TO_CHURCH})

BASE_FEATURES = ["user_registration", MAKE_DONATIONS, BE_ADDED_TO_CHURCH]


@dataclass(frozen=True)
class PlanDefinition:
    name: PlanName
    display_name: str
    ordinal: int
    monthly_price: int
    description: str
    limits: Dict[str, Optional[int]]
    features: List[str] = field(default_factory=list)
    currency: str = "NGN"

    def limit_for(self, action: str) -> Optional[int]:
        return self.limits[action]

    def has_feature(self, feature: str) -> bool:
        return feature in self.features

    def price_for(self, billing_cycle: BillingCycle) -> int:
        """Yearly billing is charged as ten months"""
        if billing_cycle == BillingCycle.yearly:
            return self.monthly_price * 10
        return self.monthly_price

    @property
    def is_paid(self) -> bool:
        return self.monthly_price > 0


PLANS: Dict[PlanName, PlanDefinition] = {
    PlanName.free: PlanDefinition(
        name=PlanName.free,
        display_name="Free Plan",
        ordinal=0,
        monthly_price=0,
        description="Free tier for basic app usage and donations",
        limits={
            CREATE_CHURCH: 1,
            CREATE_CAMPAIGN: 0,
            ADD_ADMIN_STAFF: 0,
            CREATE_VOLUNTEER_TEAM: 1,
        },
        features=list(BASE_FEATURES),
    ),
    PlanName.starter: PlanDefinition(
        name=PlanName.starter,
        display_name="Starter Plan",
        ordinal=1,
        monthly_price=3000,
        description="Perfect for small churches and ministries",
        limits={
            CREATE_CHURCH: 3,
            CREATE_CAMPAIGN: 3,
            ADD_ADMIN_STAFF: 3,
            CREATE_VOLUNTEER_TEAM: None,
        },
        features=BASE_FEATURES
        + [
            "create_church",
            "donation_campaigns",
            "admin_staff",
            "unlimited_volunteers",
            "unlimited_volunteer_teams",
            "financial_reports",
            "send_notifications",
        ],
    ),
    PlanName.organisation: PlanDefinition(
        name=PlanName.organisation,
        display_name="Organisation Plan",
        ordinal=2,
        monthly_price=9000,
        description="Complete solution for large organizations and church networks",
        limits={
            CREATE_CHURCH: None,
            CREATE_CAMPAIGN: None,
            ADD_ADMIN_STAFF: None,
            CREATE_VOLUNTEER_TEAM: None,
        },
        features=BASE_FEATURES
        + [
            "unlimited_churches",
            "unlimited_campaigns",
            "unlimited_admin_staff",
            "unlimited_volunteers",
            "unlimited_volunteer_teams",
            "financial_reports",
            "send_notifications",
            "priority_support",
        ],
    ),
}


def get_plan(name: PlanName) -> PlanDefinition:
    return PLANS[PlanName(name)]


def plans_in_order() -> List[PlanDefinition]:
    return sorted(PLANS.values(), key=lambda plan: plan.ordinal)


def paid_plan_names() -> List[str]:
    return [plan.name.value for plan in plans_in_order() if plan.is_paid]


def admits_one_more(limit: Optional[int], current: int) -> bool:
    return limit is None or current < limit


def lowest_plan_admitting(action: str, current: int) -> Optional[PlanDefinition]:
    """Cheapest plan whose limit for action admits one more than current"""
    for plan in plans_in_order():
        if admits_one_more(plan.limit_for(action), current):
            return plan
    return None
