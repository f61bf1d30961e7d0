"""API-key based caller identity.

Two keys are configured: ``API_KEY`` identifies a regular caller and
``ADMIN_API_KEY`` a privileged one. Requests without a key are anonymous.
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Header, HTTPException

from shutterquote.core.config import get_settings
from shutterquote.core.errors import Forbidden

ROLE_USER = "user"
ROLE_ADMIN = "admin"


@dataclass(frozen=True)
class Principal:
    name: str
    role: str = ROLE_USER

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


def optional_principal(x_api_key: Optional[str] = Header(default=None)) -> Optional[Principal]:
    if not x_api_key:
        return None
    settings = get_settings()
    if secrets.compare_digest(x_api_key.encode(), settings.ADMIN_API_KEY.encode()):
        return Principal(name="admin", role=ROLE_ADMIN)
    if secrets.compare_digest(x_api_key.encode(), settings.API_KEY.encode()):
        return Principal(name="user", role=ROLE_USER)
    raise HTTPException(status_code=401, detail="Invalid API key")


def ensure_admin(principal: Optional[Principal]) -> Principal:
    if principal is None or not principal.is_admin:
        raise Forbidden("Admin access required")
    return principal


def require_admin(principal: Optional[Principal] = Depends(optional_principal)) -> Principal:
    return ensure_admin(principal)
