"""
Member Entity

A person on a church's roll, optionally linked to an account.
"""

from datetime import date
from typing import Optional
from uuid import UUID

from sqlmodel import Field, Index

from .church_record import ChurchRecord
from .enums import Gender, MaritalStatus, MemberRole, MembershipType


class Member(ChurchRecord, table=True):
    """
    Member entity.

    Business Rules:
    - An active member record linked to an account grants that account
      access to the church with the member's role
    - Phone numbers are stored as 11 normalized digits
    """

    __tablename__ = "members"

    account_id: Optional[UUID] = Field(default=None, foreign_key="accounts.id", index=True)
    first_name: str = Field(max_length=50)
    last_name: str = Field(max_length=50)
    email: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=11)
    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None
    marital_status: Optional[MaritalStatus] = None

    role: MemberRole = Field(default=MemberRole.member)
    membership_type: MembershipType = Field(default=MembershipType.regular)
    is_active: bool = Field(default=True)

    __table_args__ = (
        Index("idx_member_account_church", "account_id", "church_id"),
    )
