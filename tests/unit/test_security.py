import pytest
from fastapi import HTTPException

from shutterquote.core.errors import Forbidden, NotFound, RenderingFailure, StorageUnavailable, ValidationError
from shutterquote.core.security import Principal, ensure_admin, optional_principal, require_admin


def test_api_keys_resolve_to_principals():
    assert optional_principal(None) is None
    assert optional_principal("dev-local-key") == Principal(name="user", role="user")
    admin = optional_principal("dev-admin-key")
    assert admin.is_admin

    with pytest.raises(HTTPException) as excinfo:
        optional_principal("guess")
    assert excinfo.value.status_code == 401


def test_ensure_admin():
    admin = Principal(name="admin", role="admin")
    assert ensure_admin(admin) is admin
    with pytest.raises(Forbidden):
        ensure_admin(Principal(name="user"))
    with pytest.raises(Forbidden):
        ensure_admin(None)


def test_require_admin_guards_routes():
    assert require_admin(optional_principal("dev-admin-key")).is_admin
    with pytest.raises(Forbidden):
        require_admin(optional_principal("dev-local-key"))


def test_error_status_codes():
    assert [e("x").status_code for e in (NotFound, Forbidden, ValidationError, StorageUnavailable, RenderingFailure)] == [
        404, 403, 422, 503, 500,
    ]
    assert NotFound("missing").detail == "missing"
