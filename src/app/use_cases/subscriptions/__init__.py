"""
Subscription Use Cases

Plan catalog, entitlement checks and the subscription lifecycle.
"""

from .evaluate_entitlement_use_case import EvaluateEntitlementUseCase
from .check_minimum_plan_use_case import CheckMinimumPlanUseCase
from .check_active_subscription_use_case import CheckActiveSubscriptionUseCase
from .get_subscription_info_use_case import GetSubscriptionInfoUseCase
from .get_usage_summary_use_case import GetUsageSummaryUseCase
from .subscribe_use_case import SubscribeCommand, SubscribeUseCase
from .change_plan_use_case import ChangePlanUseCase
from .cancel_subscription_use_case import CancelSubscriptionUseCase
from .renew_subscription_use_case import RenewSubscriptionUseCase
from .get_billing_history_use_case import GetBillingHistoryUseCase
from .get_subscription_analytics_use_case import GetSubscriptionAnalyticsUseCase
from .expire_lapsed_subscriptions_use_case import ExpireLapsedSubscriptionsUseCase
from .dtos import (
    BillingHistoryResponse,
    CancellationResponse,
    EntitlementDecision,
    ExpireLapsedResponse,
    PlanInfo,
    SubscriptionAnalytics,
    SubscriptionInfo,
    SubscriptionResponse,
    UsageSummary,
)

__all__ = [
    # Use Cases
    "EvaluateEntitlementUseCase",
    "CheckMinimumPlanUseCase",
    "CheckActiveSubscriptionUseCase",
    "GetSubscriptionInfoUseCase",
    "GetUsageSummaryUseCase",
    "SubscribeUseCase",
    "ChangePlanUseCase",
    "CancelSubscriptionUseCase",
    "RenewSubscriptionUseCase",
    "GetBillingHistoryUseCase",
    "GetSubscriptionAnalyticsUseCase",
    "ExpireLapsedSubscriptionsUseCase",
    # DTOs - Commands
    "SubscribeCommand",
    # DTOs - Responses
    "BillingHistoryResponse",
    "CancellationResponse",
    "EntitlementDecision",
    "ExpireLapsedResponse",
    "PlanInfo",
    "SubscriptionAnalytics",
    "SubscriptionInfo",
    "SubscriptionResponse",
    "UsageSummary",
]
