from abc import ABC, abstractmethod

from src.app.repositories.account_repository import IAccountRepository
from src.app.repositories.account_token_repository import IAccountTokenRepository
from src.app.repositories.audit_event_repository import IAuditEventRepository
from src.app.repositories.campaign_repository import ICampaignRepository
from src.app.repositories.church_record_repository import (
    IDonationRepository,
    IExpenseRepository,
    IFinancialRecordRepository,
)
from src.app.repositories.church_relationship_repository import (
    IChurchRelationshipRepository,
)
from src.app.repositories.church_repository import IChurchRepository
from src.app.repositories.member_repository import IMemberRepository
from src.app.repositories.notification_repository import INotificationRepository
from src.app.repositories.session_repository import ISessionRepository
from src.app.repositories.subscription_repository import ISubscriptionRepository
from src.app.repositories.volunteer_team_repository import IVolunteerTeamRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    accounts: IAccountRepository
    churches: IChurchRepository
    church_relationships: IChurchRelationshipRepository
    sessions: ISessionRepository
    account_tokens: IAccountTokenRepository
    audit_events: IAuditEventRepository
    subscriptions: ISubscriptionRepository
    members: IMemberRepository
    volunteer_teams: IVolunteerTeamRepository
    campaigns: ICampaignRepository
    donations: IDonationRepository
    expenses: IExpenseRepository
    financial_records: IFinancialRecordRepository
    notifications: INotificationRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
