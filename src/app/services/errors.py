"""
Authentication error catalogue.

Codes are stable and shared with the HTTP layer, which maps them to
status codes. Messages are the ones shown to callers.
"""

from libs.result import Error

INVALID_EMAIL = "INVALID_EMAIL"
INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
ACCOUNT_BANNED = "ACCOUNT_BANNED"
WEAK_PASSWORD = "WEAK_PASSWORD"
INVALID_OR_EXPIRED_CODE = "INVALID_OR_EXPIRED_CODE"
INVALID_OR_EXPIRED_TOKEN = "INVALID_OR_EXPIRED_TOKEN"
PHONE_REQUIRED = "PHONE_REQUIRED"
DELIVERY_FAILED = "DELIVERY_FAILED"
SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
EMAIL_ALREADY_EXISTS = "EMAIL_ALREADY_EXISTS"
INVALID_ROLE = "INVALID_ROLE"


def invalid_email() -> Error:
    return Error(INVALID_EMAIL, "Invalid email format")


def invalid_credentials() -> Error:
    return Error(INVALID_CREDENTIALS, "Invalid credentials")


def account_banned() -> Error:
    # Never sent to callers as-is; login maps it to invalid_credentials()
    return Error(ACCOUNT_BANNED, "Account is banned")


def weak_password(min_length: int) -> Error:
    return Error(WEAK_PASSWORD, f"Password must be at least {min_length} characters long")


def invalid_or_expired_code() -> Error:
    return Error(INVALID_OR_EXPIRED_CODE, "Invalid or expired verification code")


def invalid_or_expired_token() -> Error:
    return Error(INVALID_OR_EXPIRED_TOKEN, "Invalid or expired token")


def phone_required() -> Error:
    return Error(PHONE_REQUIRED, "Phone number is required")


def delivery_failed() -> Error:
    return Error(DELIVERY_FAILED, "Failed to send verification code. Please try again.")


def service_unavailable() -> Error:
    return Error(SERVICE_UNAVAILABLE, "Service temporarily unavailable")


def email_already_exists() -> Error:
    return Error(EMAIL_ALREADY_EXISTS, "Email already registered")


def invalid_role() -> Error:
    return Error(INVALID_ROLE, "Invalid role")
