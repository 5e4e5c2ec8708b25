"""
Church Use Case DTOs (Data Transfer Objects)
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel

from src.domain.entities import Church


# ============================================================================
# Command DTOs
# ============================================================================


class ChurchCommand(BaseModel):
    """Create or update a church; on update None means unchanged"""

    name: Optional[str] = None
    description: Optional[str] = None
    denomination: Optional[str] = None
    address: Optional[Dict[str, Any]] = None
    contact: Optional[Dict[str, Any]] = None
    pastor: Optional[Dict[str, Any]] = None


class ServiceCommand(BaseModel):
    name: str
    day: str
    start_time: str
    end_time: Optional[str] = None
    description: Optional[str] = None


class DonationCategoryCommand(BaseModel):
    name: str
    description: Optional[str] = None


class AddStaffCommand(BaseModel):
    email: str


# ============================================================================
# Response DTOs
# ============================================================================


class ChurchResponse(BaseModel):
    """
    Church view.

    settings and financial are only filled for church admins.
    """

    id: UUID
    name: str
    description: Optional[str] = None
    denomination: Optional[str] = None
    owner_id: UUID
    is_active: bool
    address: Dict[str, Any]
    contact: Dict[str, Any]
    pastor: Dict[str, Any]
    services: List[Dict[str, Any]]
    donation_categories: List[Dict[str, Any]]
    settings: Optional[Dict[str, Any]] = None
    financial: Optional[Dict[str, Any]] = None
    my_role: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(
        cls, church: Church, include_private: bool = False, my_role: Optional[str] = None
    ) -> "ChurchResponse":
        return cls(
            id=church.id,
            name=church.name,
            description=church.description,
            denomination=church.denomination,
            owner_id=church.owner_id,
            is_active=church.is_active,
            address=church.address or {},
            contact=church.contact or {},
            pastor=church.pastor or {},
            services=church.services or [],
            donation_categories=church.donation_categories or [],
            settings=church.settings if include_private else None,
            financial=church.financial if include_private else None,
            my_role=my_role,
            created_at=church.created_at,
            updated_at=church.updated_at,
        )


class StaffMember(BaseModel):
    account_id: UUID
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    role: str
    is_owner: bool
    joined_at: datetime
