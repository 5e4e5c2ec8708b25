"""
VolunteerTeam Entity
"""

from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlmodel import JSON, Field

from .church_record import ChurchRecord


class VolunteerTeam(ChurchRecord, table=True):
    """
    VolunteerTeam entity - a named group of church members.

    Business Rules:
    - roster entries reference members of the same church
    - Each member appears at most once in the roster
    """

    __tablename__ = "volunteer_teams"

    name: str = Field(max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    category: Optional[str] = Field(default=None, max_length=50)
    leader_member_id: Optional[UUID] = Field(default=None, foreign_key="members.id")
    roster: List[Dict[str, Any]] = Field(default_factory=list, sa_type=JSON)
    is_active: bool = Field(default=True)
