"""
Access Control Use Cases

Identity, tenant access and resource ownership checks used by the request gates.
"""

from .authenticate_use_case import AuthenticateUseCase
from .resolve_church_access_use_case import ResolveChurchAccessUseCase
from .load_church_resource_use_case import CHURCH_COLLECTIONS, LoadChurchResourceUseCase
from .dtos import AccountSnapshot, ChurchAccess, RequestContext

__all__ = [
    # Use Cases
    "AuthenticateUseCase",
    "ResolveChurchAccessUseCase",
    "LoadChurchResourceUseCase",
    # DTOs
    "AccountSnapshot",
    "ChurchAccess",
    "RequestContext",
    "CHURCH_COLLECTIONS",
]
