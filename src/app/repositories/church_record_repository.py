from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, Generic, List, NamedTuple, Optional, Tuple, TypeVar
from uuid import UUID

from src.domain.entities import Donation, Expense, FinancialRecordType, ManualFinancialRecord

T = TypeVar("T")


class MonthlyTotal(NamedTuple):
    """Sum and count of one category in one calendar month"""

    category: str
    year: int
    month: int
    total: float
    count: int


class IChurchRecordRepository(ABC, Generic[T]):
    """
    Repository interface shared by all church-scoped tables.

    Every lookup takes the church id: a record is never fetched by id alone.
    """

    @abstractmethod
    async def get_in_church(self, record_id: UUID, church_id: UUID) -> Optional[T]:
        """Get a record by ID, only if it belongs to the church"""
        pass

    @abstractmethod
    async def list_in_church(
        self,
        church_id: UUID,
        filters: Optional[Dict[str, Any]] = None,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> Tuple[List[T], int]:
        """
        List records of a church, newest first.

        filters maps column names to required values; None values are ignored.
        Returns the page and the total number of matches.
        """
        pass

    @abstractmethod
    async def count_in_church(self, church_id: UUID, filters: Optional[Dict[str, Any]] = None) -> int:
        """Number of records of a church matching filters"""
        pass

    @abstractmethod
    async def create(self, record: T) -> T:
        """Create a new record"""
        pass

    @abstractmethod
    async def update(self, record: T) -> T:
        """Update existing record"""
        pass

    @abstractmethod
    async def delete(self, record: T) -> None:
        """Delete a record"""
        pass


class IDonationRepository(IChurchRecordRepository[Donation]):
    """
    Donation repository interface.

    Totals cover completed donations dated by created_at; a missing
    category is reported as "general".
    """

    @abstractmethod
    async def completed_totals_by_category(
        self, church_id: UUID, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> Dict[str, float]:
        pass

    @abstractmethod
    async def completed_monthly_totals(
        self, church_id: UUID, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> List[MonthlyTotal]:
        pass


class IExpenseRepository(IChurchRecordRepository[Expense]):
    """
    Expense repository interface.

    Amounts are the approved amount where one was set.
    """

    @abstractmethod
    async def paid_totals_by_category(
        self, church_id: UUID, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> Dict[str, float]:
        """Paid expenses, dated by paid_at"""
        pass

    @abstractmethod
    async def committed_monthly_totals(
        self, church_id: UUID, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> List[MonthlyTotal]:
        """Approved and paid expenses, dated by created_at"""
        pass


class IFinancialRecordRepository(IChurchRecordRepository[ManualFinancialRecord]):
    """ManualFinancialRecord repository interface, dated by record_date"""

    @abstractmethod
    async def verified_totals_by_category(
        self,
        church_id: UUID,
        record_type: FinancialRecordType,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Dict[str, float]:
        pass

    @abstractmethod
    async def count_pending(
        self, church_id: UUID, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> int:
        pass
