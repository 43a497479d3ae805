# ecolepro/core/session.py
"""Request session resolved from the headers set by the login gateway."""
from typing import Callable, Optional

from fastapi import Depends, Header

from .exceptions import InsufficientRole, SessionRequired
from ..schemas.enums import UserRole
from ..schemas.user_schemas import SessionContext


def get_session_context(
    header_user_id: Optional[str] = Header(default=None, alias="X-User-Id"),
    header_user_name: Optional[str] = Header(default=None, alias="X-User-Name"),
    header_role: Optional[str] = Header(default=None, alias="X-User-Role"),
    header_school_id: Optional[str] = Header(default=None, alias="X-School-Id"),
) -> SessionContext:
    # prefixed names keep clear of path params such as {user_id} and {school_id}
    if not header_user_id or not header_role:
        raise SessionRequired()
    try:
        user_role = UserRole(header_role.upper())
    except ValueError:
        raise SessionRequired(f"Unknown role '{header_role}'")

    return SessionContext(
        user_id=header_user_id,
        name=header_user_name or header_user_id,
        role=user_role,
        school_id=header_school_id or None,
    )


def require_roles(*allowed_roles: UserRole) -> Callable:
    def dependency(session: SessionContext = Depends(get_session_context)) -> SessionContext:
        # SUPER_ADMIN reaches every role-gated route
        if session.is_super_admin or session.role in allowed_roles:
            return session
        raise InsufficientRole()

    return dependency


require_super_admin = require_roles(UserRole.SUPER_ADMIN)
require_school_admin = require_roles(UserRole.ADMIN)
