"""
Role to capability mapping used by the authorization dependencies.
"""
import enum
from typing import Dict, FrozenSet, Optional


class Role(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"


class Capability(str, enum.Enum):
    MANAGE_CAMPS = "manage_camps"
    MANAGE_REGISTRATIONS = "manage_registrations"
    VIEW_USERS = "view_users"


ROLE_CAPABILITIES: Dict[Role, FrozenSet[Capability]] = {
    Role.USER: frozenset(),
    Role.ADMIN: frozenset(Capability),
}


def capabilities_for(role: Optional[str]) -> FrozenSet[Capability]:
    """Unknown or missing roles get no capabilities."""
    try:
        return ROLE_CAPABILITIES[Role((role or "").lower())]
    except ValueError:
        return frozenset()


def has_capability(role: Optional[str], capability: Capability) -> bool:
    return capability in capabilities_for(role)


def is_admin(role: Optional[str]) -> bool:
    return (role or "").lower() == Role.ADMIN.value
