"""Actor roles and role-name normalization.

Pure domain logic with no external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Role(str, Enum):
    """Capability roles recognised by the authorization matrix."""

    MANAGER = "manager"
    UNIT_HEAD = "unit_head"
    TEAM_LEAD = "team_lead"
    OTHER = "other"


# Role names as they arrive from the session. Anything not listed is OTHER.
ROLE_ALIASES: dict[str, Role] = {
    "manager": Role.MANAGER,
    "dep_manager": Role.MANAGER,
    "admin": Role.MANAGER,
    "unit_head": Role.UNIT_HEAD,
    "team_lead": Role.TEAM_LEAD,
    "team_leads": Role.TEAM_LEAD,
}


def normalize_role(raw: Role | str | None) -> Role:
    """Map a session role name onto its capability role.

    Args:
        raw: Role name from the authenticated session, or an existing Role

    Returns:
        The matching Role. Senior, junior, unknown and missing roles are OTHER.
    """
    if isinstance(raw, Role):
        return raw
    if raw is None:
        return Role.OTHER
    return ROLE_ALIASES.get(str(raw).strip().lower(), Role.OTHER)


@dataclass(frozen=True)
class Actor:
    """The user requesting a mutation."""

    role: Role
    actor_id: Any = None

    @classmethod
    def from_session(cls, role: Role | str | None, actor_id: Any = None) -> "Actor":
        return cls(role=normalize_role(role), actor_id=actor_id)
