"""
Status lifecycles for church-scoped records

Each table maps a status to the statuses it may move to. Terminal statuses
map to an empty set.
"""

from typing import Any, Dict, List, Mapping, Optional, Set
from uuid import UUID

from .base import utcnow
from .entities.enums import (
    CampaignStatus,
    DonationStatus,
    ExpenseStatus,
    FinancialRecordStatus,
)

EXPENSE_TRANSITIONS: Mapping[str, Set[str]] = {
    ExpenseStatus.pending: {
        ExpenseStatus.approved,
        ExpenseStatus.rejected,
        ExpenseStatus.cancelled,
    },
    ExpenseStatus.approved: {ExpenseStatus.paid, ExpenseStatus.cancelled},
    ExpenseStatus.rejected: set(),
    ExpenseStatus.paid: set(),
    ExpenseStatus.cancelled: set(),
}

CAMPAIGN_TRANSITIONS: Mapping[str, Set[str]] = {
    CampaignStatus.draft: {CampaignStatus.active, CampaignStatus.cancelled},
    CampaignStatus.active: {
        CampaignStatus.paused,
        CampaignStatus.cancelled,
        CampaignStatus.completed,
    },
    CampaignStatus.paused: {
        CampaignStatus.active,
        CampaignStatus.cancelled,
        CampaignStatus.completed,
    },
    CampaignStatus.cancelled: set(),
    CampaignStatus.completed: set(),
}

DONATION_TRANSITIONS: Mapping[str, Set[str]] = {
    DonationStatus.pending: {DonationStatus.completed, DonationStatus.failed},
    DonationStatus.completed: {DonationStatus.refunded},
    DonationStatus.failed: set(),
    DonationStatus.refunded: set(),
}

FINANCIAL_RECORD_TRANSITIONS: Mapping[str, Set[str]] = {
    FinancialRecordStatus.pending: {
        FinancialRecordStatus.verified,
        FinancialRecordStatus.rejected,
    },
    FinancialRecordStatus.verified: set(),
    FinancialRecordStatus.rejected: set(),
}

# Campaign statuses that count towards the campaign limit
OPEN_CAMPAIGN_STATUSES = (
    CampaignStatus.draft,
    CampaignStatus.active,
    CampaignStatus.paused,
)


def _plain(status: Any) -> str:
    return status.value if hasattr(status, "value") else str(status)


def can_transition(transitions: Mapping[str, Set[str]], current: str, target: str) -> bool:
    return target in transitions.get(current, set())


def append_status_history(
    history: List[Dict[str, Any]],
    from_status: str,
    to_status: str,
    changed_by: Optional[UUID],
    reason: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """Return a new history list with the transition appended"""
    entry = {
        "from": _plain(from_status),
        "to": _plain(to_status),
        "changed_by": str(changed_by) if changed_by else None,
        "changed_at": utcnow().isoformat(),
    }
    if reason:
        entry["reason"] = reason
    return [*history, entry]
