"""
Church Management Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class AccountRole(str, Enum):
    """Global account role"""

    admin = "admin"
    volunteer = "volunteer"
    member = "member"


class AccountTokenPurpose(str, Enum):
    """What a one-time account token is good for"""

    password_reset = "password_reset"
    email_verification = "email_verification"


class ChurchRole(str, Enum):
    """Role an account holds within a church"""

    admin = "admin"
    volunteer = "volunteer"
    member = "member"


class MemberRole(str, Enum):
    """Role recorded on a church member record"""

    member = "member"
    volunteer = "volunteer"
    leader = "leader"


class MembershipType(str, Enum):
    regular = "regular"
    associate = "associate"
    visitor = "visitor"


class Gender(str, Enum):
    male = "male"
    female = "female"


class MaritalStatus(str, Enum):
    single = "single"
    married = "married"
    divorced = "divorced"
    widowed = "widowed"


class PlanName(str, Enum):
    """Subscription plans, declared in ordinal order"""

    free = "free"
    starter = "starter"
    organisation = "organisation"


class SubscriptionStatus(str, Enum):
    active = "active"
    cancelled = "cancelled"
    expired = "expired"


class BillingCycle(str, Enum):
    monthly = "monthly"
    yearly = "yearly"


class PaymentMethod(str, Enum):
    card = "card"
    bank_transfer = "bank-transfer"
    monnify = "monnify"
    other = "other"


class Currency(str, Enum):
    NGN = "NGN"
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"


class DonationStatus(str, Enum):
    pending = "pending"
    completed = "completed"
    failed = "failed"
    refunded = "refunded"


class DonationPaymentMethod(str, Enum):
    cash = "cash"
    bank_transfer = "bank-transfer"
    card = "card"
    mobile_money = "mobile-money"
    online = "online"


class ExpenseStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"
    paid = "paid"
    cancelled = "cancelled"


class ExpensePriority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"
    urgent = "urgent"


class CampaignStatus(str, Enum):
    draft = "draft"
    active = "active"
    paused = "paused"
    cancelled = "cancelled"
    completed = "completed"


class FinancialRecordType(str, Enum):
    income = "income"
    expense = "expense"


class FinancialRecordStatus(str, Enum):
    pending = "pending"
    verified = "verified"
    rejected = "rejected"


class NotificationType(str, Enum):
    donation = "donation"
    expense = "expense"
    member = "member"
    volunteer = "volunteer"
    campaign = "campaign"
    event = "event"
    general = "general"
    urgent = "urgent"


class NotificationPriority(str, Enum):
    low = "low"
    normal = "normal"
    high = "high"
    urgent = "urgent"


class NotificationChannel(str, Enum):
    email = "email"
    push = "push"
    sms = "sms"
    in_app = "in-app"


class RecipientGroup(str, Enum):
    all = "all"
    members = "members"
    volunteers = "volunteers"
    admins = "admins"
    specific = "specific"
