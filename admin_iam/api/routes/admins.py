from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status
from pydantic import BaseModel, EmailStr, Field, ValidationInfo, field_validator

from admin_iam.api.error import ClientError, ServerError
from admin_iam.api.utils.validators import (
    check_password_length,
    check_password_min_length,
    check_password_strength,
    normalize_name,
    normalize_phone,
)
from admin_iam.app.services.credential_verifier import CredentialVerifier
from admin_iam.app.services.request_pipeline import Principal
from admin_iam.app.services.unit_of_work import UnitOfWork
from admin_iam.app.use_cases.admins import (
    AdminDetailResponse,
    AdminListResponse,
    GetAdminUseCase,
    ListAdminsUseCase,
    RegisterAdminCommand,
    RegisterAdminResponse,
    RegisterAdminUseCase,
    UpdateAdminCommand,
    UpdateAdminResponse,
    UpdateAdminUseCase,
    UpdatePasswordCommand,
    UpdatePasswordUseCase,
)
from admin_iam.app.use_cases.admins.list_admins_use_case import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    MAX_LIMIT,
)
from admin_iam.depends import (
    authenticate,
    get_credential_verifier,
    get_current_admin,
    get_unit_of_work,
)
from admin_iam.domain.entities import AdminRole

router = APIRouter(prefix="/admins", tags=["Admins"])

# Moderators are rejected before the use case runs
require_admin_or_above = authenticate(AdminRole.admin, AdminRole.super_admin)

_STATUS_BY_CODE = {
    "FORBIDDEN": status.HTTP_403_FORBIDDEN,
    "ADMIN_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "EMAIL_ALREADY_EXISTS": status.HTTP_409_CONFLICT,
    "PHONE_ALREADY_EXISTS": status.HTTP_409_CONFLICT,
    "OLD_PASSWORD_REQUIRED": status.HTTP_400_BAD_REQUEST,
    "INVALID_OLD_PASSWORD": status.HTTP_401_UNAUTHORIZED,
    "PASSWORD_MISMATCH": 422,
}


def _raise_for_error(error):
    status_code = _STATUS_BY_CODE.get(error.code)
    if status_code is None:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code)


class RegisterAdminRequest(BaseModel):
    """
    Register admin HTTP request payload

    Validates incoming HTTP request before converting to RegisterAdminCommand.
    """

    name: str = Field(..., description="Display name (min 2 chars)")
    email: EmailStr = Field(..., description="Admin email address")
    password: str = Field(..., description="Password meeting the strength policy")
    role: AdminRole = Field(..., description="moderator, admin or super_admin")
    phone: Optional[str] = Field(None, description="E.164-style phone number")

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        return normalize_name(value)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return check_password_strength(value)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, value: Optional[str]) -> Optional[str]:
        return normalize_phone(value)


@router.post(
    "", status_code=status.HTTP_201_CREATED, response_model=RegisterAdminResponse
)
async def register_admin(
    request: RegisterAdminRequest,
    current_admin: Principal = Depends(require_admin_or_above),
    uow: UnitOfWork = Depends(get_unit_of_work),
    verifier: CredentialVerifier = Depends(get_credential_verifier),
):
    """
    Register Admin

    Admins can create moderators; super admins can create any role.

    Raises:
        - 401 Unauthorized: Missing or invalid access token
        - 403 Forbidden: Role not allowed to create the requested role
        - 409 Conflict: Email or phone already exists
        - 422 Unprocessable Entity: Invalid input
    """
    command = RegisterAdminCommand(
        name=request.name,
        email=request.email,
        password=request.password,
        role=request.role,
        phone=request.phone,
    )

    use_case = RegisterAdminUseCase(uow, verifier)
    result = await use_case.execute(current_admin.role, command)

    if result.is_err():
        _raise_for_error(result.error)

    return result.value


@router.get("", status_code=status.HTTP_200_OK, response_model=AdminListResponse)
async def list_admins(
    page: int = Query(DEFAULT_PAGE, ge=1, description="Page number"),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT, description="Page size"),
    current_admin: Principal = Depends(get_current_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List Admins

    Paginated, ordered by ID.

    Raises:
        - 401 Unauthorized: Missing or invalid access token
        - 422 Unprocessable Entity: page < 1 or limit outside 1..100
    """
    use_case = ListAdminsUseCase(uow)
    result = await use_case.execute(page, limit)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.get("/me", status_code=status.HTTP_200_OK, response_model=AdminDetailResponse)
async def get_me(
    current_admin: Principal = Depends(get_current_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Load the authenticated admin"""
    use_case = GetAdminUseCase(uow)
    result = await use_case.execute(current_admin.id)

    if result.is_err():
        _raise_for_error(result.error)

    return result.value


@router.get(
    "/{admin_id}", status_code=status.HTTP_200_OK, response_model=AdminDetailResponse
)
async def get_admin(
    admin_id: int = Path(..., gt=0, description="Admin ID"),
    current_admin: Principal = Depends(get_current_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Admin

    Raises:
        - 401 Unauthorized: Missing or invalid access token
        - 404 Not Found: ADMIN_NOT_FOUND
    """
    use_case = GetAdminUseCase(uow)
    result = await use_case.execute(admin_id)

    if result.is_err():
        _raise_for_error(result.error)

    return result.value


class UpdateAdminRequest(BaseModel):
    """Update admin HTTP request payload; omitted fields stay unchanged"""

    name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    role: Optional[AdminRole] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: Optional[str]) -> Optional[str]:
        return normalize_name(value)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, value: Optional[str]) -> Optional[str]:
        return normalize_phone(value)


@router.patch(
    "/{admin_id}", status_code=status.HTTP_200_OK, response_model=UpdateAdminResponse
)
async def update_admin(
    request: UpdateAdminRequest,
    admin_id: int = Path(..., gt=0, description="Admin ID"),
    current_admin: Principal = Depends(get_current_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update Admin Details

    Raises:
        - 401 Unauthorized: Missing or invalid access token
        - 403 Forbidden: Role hierarchy forbids the change, or own role change
        - 404 Not Found: ADMIN_NOT_FOUND
        - 409 Conflict: Email or phone taken by another admin
    """
    command = UpdateAdminCommand(**request.model_dump())

    use_case = UpdateAdminUseCase(uow)
    result = await use_case.execute(
        current_admin.role, current_admin.id, admin_id, command
    )

    if result.is_err():
        _raise_for_error(result.error)

    return result.value


class UpdatePasswordRequest(BaseModel):
    """Update password HTTP request payload"""

    old_password: Optional[str] = Field(
        None, description="Required when changing your own password"
    )
    new_password: str = Field(..., description="New password")
    confirm_password: str = Field(..., description="Must equal new_password")

    @field_validator("old_password")
    @classmethod
    def validate_old_password(cls, value: Optional[str]) -> Optional[str]:
        return None if value is None else check_password_length(value)

    @field_validator("new_password")
    @classmethod
    def validate_new_password(cls, value: str) -> str:
        return check_password_min_length(value)

    @field_validator("confirm_password")
    @classmethod
    def passwords_match(cls, value: str, info: ValidationInfo) -> str:
        new_password = info.data.get("new_password")
        if new_password is not None and value != new_password:
            raise ValueError("New password and confirmation password do not match")
        return value


@router.patch(
    "/{admin_id}/password",
    status_code=status.HTTP_200_OK,
    response_model=UpdateAdminResponse,
)
async def update_password(
    request: UpdatePasswordRequest,
    admin_id: int = Path(..., gt=0, description="Admin ID"),
    current_admin: Principal = Depends(get_current_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    verifier: CredentialVerifier = Depends(get_credential_verifier),
):
    """
    Update Admin Password

    Self-service requires the old password. Revokes the target's session.

    Raises:
        - 400 Bad Request: Old password missing on self-service
        - 401 Unauthorized: Invalid access token or incorrect old password
        - 403 Forbidden: Role hierarchy forbids the reset
        - 404 Not Found: ADMIN_NOT_FOUND
        - 422 Unprocessable Entity: Passwords do not match or too weak
    """
    command = UpdatePasswordCommand(
        old_password=request.old_password,
        new_password=request.new_password,
        confirm_password=request.confirm_password,
    )

    use_case = UpdatePasswordUseCase(uow, verifier)
    result = await use_case.execute(
        current_admin.role, current_admin.id, admin_id, command
    )

    if result.is_err():
        _raise_for_error(result.error)

    return result.value
