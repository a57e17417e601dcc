"""
Park Portal Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum, IntEnum
from typing import Union


class UserStatus(str, Enum):
    """Account approval status"""

    pending = "pending"
    active = "active"
    rejected = "rejected"


class TwoFactorMethod(str, Enum):
    """Second factor configured by the user"""

    authenticator = "authenticator"
    email = "email"


class DeliveryChannel(str, Enum):
    """Out-of-band channel a one-time code or link is delivered over"""

    sms = "sms"
    email = "email"


class UserRole(IntEnum):
    """User type. The integer value is the code persisted by older clients."""

    youth = 1
    organization = 2
    admin = 3

    @property
    def label(self) -> str:
        return ROLE_LABELS[self]


ROLE_LABELS = {
    UserRole.youth: "Youth",
    UserRole.organization: "Organization",
    UserRole.admin: "Admin",
}

ROLES_BY_NAME = {role.name: role for role in UserRole}


def parse_role(value: Union[int, str, UserRole]) -> UserRole:
    """
    Resolve a role from its numeric code or its name.

    Raises:
        ValueError: if the value matches no role
    """
    if isinstance(value, UserRole):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Unknown role: {value!r}")
    if isinstance(value, int):
        return UserRole(value)
    if isinstance(value, str):
        key = value.strip().lower()
        if key.isdigit():
            return UserRole(int(key))
        if key in ROLES_BY_NAME:
            return ROLES_BY_NAME[key]
    raise ValueError(f"Unknown role: {value!r}")
