from __future__ import annotations

from dataclasses import dataclass

from dealership.domain.errors import ForbiddenError, UnauthorizedError


@dataclass(frozen=True, slots=True)
class Identity:
    """The caller as vouched for by the upstream authentication layer."""

    user_id: str
    is_admin: bool = False


def require_identity(caller: Identity | None) -> Identity:
    if caller is None:
        raise UnauthorizedError("Authentication required")
    return caller


def require_admin(caller: Identity | None) -> Identity:
    caller = require_identity(caller)
    if not caller.is_admin:
        raise ForbiddenError("Admin privileges required", user_id=caller.user_id)
    return caller
