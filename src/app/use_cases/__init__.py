"""
Use Cases

Organized into domain folders:
- access/: Identity, church access and resource ownership checks
- auth/: Registration, login and token flows
- users/: Profile and account administration
- churches/: Church tenants, configuration and staff
- subscriptions/: Plans, entitlements and billing
- records/: Church-scoped records (members, teams, campaigns, finances)
- notifications/: Church notifications and recipient inboxes

Import from subdirectories for better organization.
"""

from .access import (
    AuthenticateUseCase,
    ResolveChurchAccessUseCase,
    LoadChurchResourceUseCase,
)
from .auth import (
    RegisterUseCase,
    LoginUseCase,
    RefreshTokenUseCase,
    LogoutUseCase,
)
from .subscriptions import (
    EvaluateEntitlementUseCase,
    CheckMinimumPlanUseCase,
    CheckActiveSubscriptionUseCase,
)
from .notifications import (
    RecipientNotificationsUseCase,
    SendNotificationUseCase,
)

__all__ = [
    # Access
    "AuthenticateUseCase",
    "ResolveChurchAccessUseCase",
    "LoadChurchResourceUseCase",
    # Auth
    "RegisterUseCase",
    "LoginUseCase",
    "RefreshTokenUseCase",
    "LogoutUseCase",
    # Entitlements
    "EvaluateEntitlementUseCase",
    "CheckMinimumPlanUseCase",
    "CheckActiveSubscriptionUseCase",
    # Notifications
    "RecipientNotificationsUseCase",
    "SendNotificationUseCase",
]
