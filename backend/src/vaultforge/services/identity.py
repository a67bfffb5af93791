"""Caller identity consumed by services."""

from dataclasses import dataclass, field
from typing import Protocol


class IdentityProvider(Protocol):
    """Supplies the calling user's id.

    The core treats the id as an opaque string and scopes every query by
    it. ``None`` means a system context (cleanup jobs, cascades) that runs
    unscoped.
    """

    @property
    def user_id(self) -> str | None: ...


@dataclass
class UserContext:
    """User context for a request.

    Attributes:
        user_id: The authenticated user's ID (None for system contexts)
        roles: List of role names the user has
    """

    user_id: str | None = None
    roles: list[str] = field(default_factory=list)

    @classmethod
    def system(cls) -> "UserContext":
        return cls(user_id=None, roles=["system"])

    @property
    def is_system(self) -> bool:
        return self.user_id is None
