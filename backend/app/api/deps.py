"""Shared API dependencies — single import point for all routers::

    from app.api.deps import get_db, require_roles
"""

from app.auth.dependencies import (
    Identity,
    get_current_identity,
    get_current_user,
    identify_request,
    require_roles,
)
from app.database import get_db
from app.models.user import Role
from app.services.storage import ObjectStorage, get_storage

admin_only = require_roles(Role.ADMIN)
any_role = require_roles(Role.ADMIN, Role.USER)

__all__ = [
    "Identity",
    "ObjectStorage",
    "admin_only",
    "any_role",
    "get_current_identity",
    "get_current_user",
    "get_db",
    "get_storage",
    "identify_request",
    "require_roles",
]
