from typing import Any, List, Literal, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import Field

from src.api.error import unwrap
from src.api.response import ApiResponse, ok
from src.api.utils.access import (
    enforce_entitlement,
    get_church_context,
    require_church_admin,
    require_entitlement,
)
from src.api.utils.validators import Email, PhoneNumber, RequestModel, page_params
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.access import RequestContext
from src.app.use_cases.churches import (
    AddStaffCommand,
    ChurchCommand,
    ChurchConfigurationUseCase,
    ChurchResponse,
    ChurchStaffUseCase,
    CreateChurchUseCase,
    DeactivateChurchUseCase,
    DonationCategoryCommand,
    GetChurchUseCase,
    ListChurchesUseCase,
    ListMyChurchesUseCase,
    ServiceCommand,
    StaffMember,
    UpdateChurchUseCase,
)
from src.app.use_cases.pagination import Page, PageRequest
from src.app.use_cases.records import ChurchStats, ChurchStatsUseCase
from src.depends import get_optional_context, get_request_context, get_unit_of_work
from src.domain.plans import ADD_ADMIN_STAFF, CREATE_CHURCH

router = APIRouter(prefix="/churches", tags=["Churches"])

CHURCH_ERRORS = {
    "NAME_REQUIRED": status.HTTP_400_BAD_REQUEST,
    "OWNER_ROLE_FIXED": status.HTTP_400_BAD_REQUEST,
    "CHURCH_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "ACCOUNT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "STAFF_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "SERVICE_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "CATEGORY_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "CHURCH_ALREADY_INACTIVE": status.HTTP_409_CONFLICT,
    "CATEGORY_EXISTS": status.HTTP_409_CONFLICT,
    "ALREADY_STAFF": status.HTTP_409_CONFLICT,
}


class AddressRequest(RequestModel):
    street: Optional[str] = Field(None, max_length=200)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=100)
    country: Optional[str] = Field(None, max_length=100)
    postal_code: Optional[str] = Field(None, max_length=20)


class ContactRequest(RequestModel):
    email: Optional[Email] = None
    phone: Optional[PhoneNumber] = None
    website: Optional[str] = Field(None, max_length=200)


class PastorRequest(RequestModel):
    name: Optional[str] = Field(None, max_length=100)
    email: Optional[Email] = None
    phone: Optional[PhoneNumber] = None


class CreateChurchRequest(RequestModel):
    name: str = Field(..., min_length=2, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    denomination: Optional[str] = Field(None, max_length=100)
    address: Optional[AddressRequest] = None
    contact: Optional[ContactRequest] = None
    pastor: Optional[PastorRequest] = None


class UpdateChurchRequest(CreateChurchRequest):
    name: Optional[str] = Field(None, min_length=2, max_length=100)


def _church_command(request: CreateChurchRequest) -> ChurchCommand:
    values = request.model_dump(exclude_unset=True, mode="json")
    for nested in ("address", "contact", "pastor"):
        if values.get(nested) is not None:
            values[nested] = {k: v for k, v in values[nested].items() if v is not None}
    return ChurchCommand(**values)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ApiResponse[ChurchResponse])
async def create_church(
    request: CreateChurchRequest,
    context: RequestContext = Depends(require_entitlement(CREATE_CHURCH)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create a church owned by the caller, who becomes its admin.

    Raises:
        - 403 Forbidden: The plan's church limit is reached
    """
    result = await CreateChurchUseCase(uow).execute(context.account_id, _church_command(request))
    return ok(unwrap(result, CHURCH_ERRORS), "Church created successfully")


@router.get("", status_code=status.HTTP_200_OK, response_model=ApiResponse[Page[ChurchResponse]])
async def list_churches(
    search: Optional[str] = None,
    denomination: Optional[str] = None,
    page: PageRequest = Depends(page_params),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Public directory of active churches"""
    result = await ListChurchesUseCase(uow).execute(page, search=search, denomination=denomination)
    return ok(unwrap(result, CHURCH_ERRORS))


@router.get("/mine", status_code=status.HTTP_200_OK, response_model=ApiResponse[List[ChurchResponse]])
async def my_churches(
    context: RequestContext = Depends(get_request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ListMyChurchesUseCase(uow).execute(context.account_id)
    return ok(unwrap(result, CHURCH_ERRORS))


@router.get("/{church_id}", status_code=status.HTTP_200_OK, response_model=ApiResponse[ChurchResponse])
async def get_church(
    church_id: UUID,
    context: RequestContext = Depends(get_optional_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Public church profile; admins also see settings and financial configuration"""
    viewer_id = context.account_id if context.is_authenticated else None
    result = await GetChurchUseCase(uow).execute(church_id, viewer_id)
    return ok(unwrap(result, CHURCH_ERRORS))


@router.put("/{church_id}", status_code=status.HTTP_200_OK, response_model=ApiResponse[ChurchResponse])
async def update_church(
    request: UpdateChurchRequest,
    context: RequestContext = Depends(require_church_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await UpdateChurchUseCase(uow).execute(context.church_id, _church_command(request))
    return ok(unwrap(result, CHURCH_ERRORS), "Church updated successfully")


@router.delete("/{church_id}", status_code=status.HTTP_200_OK, response_model=ApiResponse[ChurchResponse])
async def deactivate_church(
    context: RequestContext = Depends(require_church_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Deactivate the church; its records are kept"""
    result = await DeactivateChurchUseCase(uow).execute(context.church_id, context.account_id)
    return ok(unwrap(result, CHURCH_ERRORS), "Church deactivated successfully")


@router.get(
    "/{church_id}/stats", status_code=status.HTTP_200_OK, response_model=ApiResponse[ChurchStats]
)
async def church_stats(
    context: RequestContext = Depends(get_church_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Member, volunteer and money totals for the church dashboard"""
    result = await ChurchStatsUseCase(uow).overview(context.church_id)
    return ok(unwrap(result, CHURCH_ERRORS))


# ----------------------------------------------------------------------------
# Configuration
# ----------------------------------------------------------------------------


class ServiceRequest(RequestModel):
    name: str = Field(..., min_length=1, max_length=100)
    day: str = Field(..., pattern=r"^(monday|tuesday|wednesday|thursday|friday|saturday|sunday)$")
    start_time: str = Field(..., pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    end_time: Optional[str] = Field(None, pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    description: Optional[str] = Field(None, max_length=300)


@router.post(
    "/{church_id}/services", status_code=status.HTTP_201_CREATED, response_model=ApiResponse[ChurchResponse]
)
async def add_service(
    request: ServiceRequest,
    context: RequestContext = Depends(require_church_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ChurchConfigurationUseCase(uow).add_service(
        context.church_id, ServiceCommand(**request.model_dump())
    )
    return ok(unwrap(result, CHURCH_ERRORS), "Service added successfully")


class UpdateServiceRequest(ServiceRequest):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    day: Optional[str] = Field(
        None, pattern=r"^(monday|tuesday|wednesday|thursday|friday|saturday|sunday)$"
    )
    start_time: Optional[str] = Field(None, pattern=r"^([01]\d|2[0-3]):[0-5]\d$")


@router.put(
    "/{church_id}/services/{service_id}",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[ChurchResponse],
)
async def update_service(
    service_id: str,
    request: UpdateServiceRequest,
    context: RequestContext = Depends(require_church_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ChurchConfigurationUseCase(uow).update_service(
        context.church_id, service_id, request.model_dump(exclude_none=True)
    )
    return ok(unwrap(result, CHURCH_ERRORS), "Service updated successfully")


@router.delete(
    "/{church_id}/services/{service_id}",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[ChurchResponse],
)
async def remove_service(
    service_id: str,
    context: RequestContext = Depends(require_church_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ChurchConfigurationUseCase(uow).remove_service(context.church_id, service_id)
    return ok(unwrap(result, CHURCH_ERRORS), "Service removed successfully")


class DonationCategoryRequest(RequestModel):
    name: str = Field(..., min_length=1, max_length=50)
    description: Optional[str] = Field(None, max_length=200)


@router.post(
    "/{church_id}/donation-categories",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[ChurchResponse],
)
async def add_donation_category(
    request: DonationCategoryRequest,
    context: RequestContext = Depends(require_church_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ChurchConfigurationUseCase(uow).add_donation_category(
        context.church_id, DonationCategoryCommand(**request.model_dump())
    )
    return ok(unwrap(result, CHURCH_ERRORS), "Donation category added successfully")


class UpdateDonationCategoryRequest(DonationCategoryRequest):
    name: Optional[str] = Field(None, min_length=1, max_length=50)
    is_active: Optional[bool] = None


@router.put(
    "/{church_id}/donation-categories/{category_id}",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[ChurchResponse],
)
async def update_donation_category(
    category_id: str,
    request: UpdateDonationCategoryRequest,
    context: RequestContext = Depends(require_church_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Rename, describe or retire a donation category.

    Raises:
        - 404 Not Found: Category not found
        - 409 Conflict: Another category already has this name
    """
    result = await ChurchConfigurationUseCase(uow).update_donation_category(
        context.church_id, category_id, request.model_dump(exclude_none=True)
    )
    return ok(unwrap(result, CHURCH_ERRORS), "Donation category updated successfully")


@router.delete(
    "/{church_id}/donation-categories/{category_id}",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse[ChurchResponse],
)
async def remove_donation_category(
    category_id: str,
    context: RequestContext = Depends(require_church_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ChurchConfigurationUseCase(uow).remove_donation_category(
        context.church_id, category_id
    )
    return ok(unwrap(result, CHURCH_ERRORS), "Donation category removed successfully")


class SettingsRequest(RequestModel):
    currency: Optional[str] = Field(None, pattern=r"^(NGN|USD|EUR|GBP)$")
    timezone: Optional[str] = Field(None, max_length=50)
    language: Optional[str] = Field(None, max_length=10)


@router.put(
    "/{church_id}/settings", status_code=status.HTTP_200_OK, response_model=ApiResponse[ChurchResponse]
)
async def update_settings(
    request: SettingsRequest,
    context: RequestContext = Depends(require_church_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ChurchConfigurationUseCase(uow).update_settings(
        context.church_id, request.model_dump(exclude_none=True)
    )
    return ok(unwrap(result, CHURCH_ERRORS), "Settings updated successfully")


class FinancialRequest(RequestModel):
    bank_name: Optional[str] = Field(None, max_length=100)
    account_name: Optional[str] = Field(None, max_length=100)
    account_number: Optional[str] = Field(None, pattern=r"^\d{10}$")
    fiscal_year_start: Optional[int] = Field(None, ge=1, le=12)


@router.put(
    "/{church_id}/financial", status_code=status.HTTP_200_OK, response_model=ApiResponse[ChurchResponse]
)
async def update_financial(
    request: FinancialRequest,
    context: RequestContext = Depends(require_church_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ChurchConfigurationUseCase(uow).update_financial(
        context.church_id, request.model_dump(exclude_none=True)
    )
    return ok(unwrap(result, CHURCH_ERRORS), "Financial configuration updated successfully")


# ----------------------------------------------------------------------------
# Staff
# ----------------------------------------------------------------------------


@router.get(
    "/{church_id}/staff", status_code=status.HTTP_200_OK, response_model=ApiResponse[List[StaffMember]]
)
async def list_staff(
    context: RequestContext = Depends(get_church_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ChurchStaffUseCase(uow).list_staff(context.church_id)
    return ok(unwrap(result, CHURCH_ERRORS))


class AddStaffRequest(RequestModel):
    email: Email
    role: Literal["admin"] = "admin"


@router.post(
    "/{church_id}/staff", status_code=status.HTTP_201_CREATED, response_model=ApiResponse[StaffMember]
)
async def add_staff(
    request: AddStaffRequest,
    context: RequestContext = Depends(require_church_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Make an existing account a church admin.

    Staff are always admins and count against the owner's admin staff
    limit; members and volunteers are managed as member records.

    Raises:
        - 403 Forbidden: The church owner's plan allows no more admin staff
        - 404 Not Found: No active account with this email
        - 400 Bad Request: A role other than admin
    """
    await enforce_entitlement(uow, context, ADD_ADMIN_STAFF, church_id=context.church_id)

    result = await ChurchStaffUseCase(uow).add_staff(
        context.church_id, context.account_id, AddStaffCommand(email=request.email)
    )
    return ok(unwrap(result, CHURCH_ERRORS), "Staff member added successfully")


@router.delete(
    "/{church_id}/staff/{account_id}", status_code=status.HTTP_200_OK, response_model=ApiResponse[Any]
)
async def remove_staff(
    account_id: UUID,
    context: RequestContext = Depends(require_church_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ChurchStaffUseCase(uow).remove_staff(
        context.church_id, context.account_id, account_id
    )
    unwrap(result, CHURCH_ERRORS)
    return ok(message="Staff member removed successfully")
