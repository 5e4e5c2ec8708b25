from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.account_repository import AccountRepository
from src.adapter.repositories.account_token_repository import AccountTokenRepository
from src.adapter.repositories.audit_event_repository import AuditEventRepository
from src.adapter.repositories.campaign_repository import CampaignRepository
from src.adapter.repositories.church_record_repository import (
    DonationRepository,
    ExpenseRepository,
    FinancialRecordRepository,
)
from src.adapter.repositories.church_relationship_repository import (
    ChurchRelationshipRepository,
)
from src.adapter.repositories.church_repository import ChurchRepository
from src.adapter.repositories.member_repository import MemberRepository
from src.adapter.repositories.notification_repository import NotificationRepository
from src.adapter.repositories.session_repository import SessionRepository
from src.adapter.repositories.subscription_repository import SubscriptionRepository
from src.adapter.repositories.volunteer_team_repository import VolunteerTeamRepository
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.accounts = AccountRepository(self.session)
        self.churches = ChurchRepository(self.session)
        self.church_relationships = ChurchRelationshipRepository(self.session)
        self.sessions = SessionRepository(self.session)
        self.account_tokens = AccountTokenRepository(self.session)
        self.audit_events = AuditEventRepository(self.session)
        self.subscriptions = SubscriptionRepository(self.session)
        self.members = MemberRepository(self.session)
        self.volunteer_teams = VolunteerTeamRepository(self.session)
        self.campaigns = CampaignRepository(self.session)
        self.donations = DonationRepository(self.session)
        self.expenses = ExpenseRepository(self.session)
        self.financial_records = FinancialRecordRepository(self.session)
        self.notifications = NotificationRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
