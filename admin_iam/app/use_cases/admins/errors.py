from admin_iam.libs.result import Error

EMAIL_ALREADY_EXISTS = Error(
    "EMAIL_ALREADY_EXISTS", "Email is already taken by another admin"
)
PHONE_ALREADY_EXISTS = Error(
    "PHONE_ALREADY_EXISTS", "Phone number is already taken by another admin"
)


def conflict_error(field: str) -> Error:
    """Conflict error for a duplicate email or phone"""
    return PHONE_ALREADY_EXISTS if field == "phone" else EMAIL_ALREADY_EXISTS
