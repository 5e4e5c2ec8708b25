"""
Church Management Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

from .enums import (
    AccountRole,
    AccountTokenPurpose,
    BillingCycle,
    CampaignStatus,
    ChurchRole,
    Currency,
    DonationPaymentMethod,
    DonationStatus,
    ExpensePriority,
    ExpenseStatus,
    FinancialRecordStatus,
    FinancialRecordType,
    Gender,
    MaritalStatus,
    MemberRole,
    MembershipType,
    NotificationChannel,
    NotificationPriority,
    NotificationType,
    PaymentMethod,
    PlanName,
    RecipientGroup,
    SubscriptionStatus,
)

from .account import Account
from .church import Church
from .church_relationship import ChurchRelationship
from .church_record import ChurchRecord, LifecycleRecord
from .member import Member
from .volunteer_team import VolunteerTeam
from .campaign import DonationCampaign
from .donation import Donation
from .expense import Expense
from .financial_record import ManualFinancialRecord
from .notification import Notification
from .subscription import AccountSubscription
from .session import Session
from .audit_event import AuditEvent
from .account_token import AccountToken

__all__ = [
    # Enums
    "AccountRole",
    "AccountTokenPurpose",
    "BillingCycle",
    "CampaignStatus",
    "ChurchRole",
    "Currency",
    "DonationPaymentMethod",
    "DonationStatus",
    "ExpensePriority",
    "ExpenseStatus",
    "FinancialRecordStatus",
    "FinancialRecordType",
    "Gender",
    "MaritalStatus",
    "MemberRole",
    "MembershipType",
    "NotificationChannel",
    "NotificationPriority",
    "NotificationType",
    "PaymentMethod",
    "PlanName",
    "RecipientGroup",
    "SubscriptionStatus",
    # Entities
    "Account",
    "Church",
    "ChurchRelationship",
    "ChurchRecord",
    "LifecycleRecord",
    "Member",
    "VolunteerTeam",
    "DonationCampaign",
    "Donation",
    "Expense",
    "ManualFinancialRecord",
    "Notification",
    "AccountSubscription",
    "Session",
    "AuditEvent",
    "AccountToken",
]
