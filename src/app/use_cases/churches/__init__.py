"""
Church Use Cases

Church profile, configuration and staff.
"""

from .create_church_use_case import CreateChurchUseCase
from .list_churches_use_case import ListChurchesUseCase, ListMyChurchesUseCase
from .get_church_use_case import GetChurchUseCase
from .update_church_use_case import DeactivateChurchUseCase, UpdateChurchUseCase
from .church_configuration_use_case import ChurchConfigurationUseCase
from .staff_use_case import ChurchStaffUseCase
from .dtos import (
    AddStaffCommand,
    ChurchCommand,
    ChurchResponse,
    DonationCategoryCommand,
    ServiceCommand,
    StaffMember,
)

__all__ = [
    # Use Cases
    "CreateChurchUseCase",
    "ListChurchesUseCase",
    "ListMyChurchesUseCase",
    "GetChurchUseCase",
    "UpdateChurchUseCase",
    "DeactivateChurchUseCase",
    "ChurchConfigurationUseCase",
    "ChurchStaffUseCase",
    # DTOs - Commands
    "AddStaffCommand",
    "ChurchCommand",
    "DonationCategoryCommand",
    "ServiceCommand",
    # DTOs - Responses
    "ChurchResponse",
    "StaffMember",
]
