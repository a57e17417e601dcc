import hashlib
import re
import secrets
import uuid
from datetime import UTC, datetime

from email_validator import EmailNotValidError, validate_email

EMAIL_MAX_LENGTH = 254

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B-\x0C\x0E-\x1F\x7F]")


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    """Naive UTC timestamp, matching the DateTime columns and CURRENT_TIMESTAMP"""
    return datetime.now(UTC).replace(tzinfo=None)


def generate_opaque_token() -> str:
    """32 bytes of secure randomness, hex encoded (64 chars)"""
    return secrets.token_hex(32)


def hash_token(token: str) -> str:
    """SHA-256 digest stored in place of the opaque token"""
    return hashlib.sha256(token.encode()).hexdigest()


def normalize_email(raw: object) -> str:
    """
    Trim, strip control characters, lower-case and validate an email address.

    Raises:
        ValueError: if the value is empty, too long or not an email address
    """
    if raw is None:
        raise ValueError("Invalid email format")

    email = _CONTROL_CHARS.sub("", str(raw).strip()).lower()
    if not email or len(email) > EMAIL_MAX_LENGTH:
        raise ValueError("Invalid email format")

    try:
        validated = validate_email(email, check_deliverability=False)
    except EmailNotValidError as exc:
        raise ValueError("Invalid email format") from exc

    return validated.normalized.lower()
