"""PermissionDeleteAuthorizer unit tests."""

import pytest

from reaper.application.dtos.caller import Caller
from reaper.application.services.authorization_service import PermissionDeleteAuthorizer


@pytest.mark.parametrize(
    "permissions, expected",
    [
        ({"record:delete"}, True),
        ({"record:*"}, True),
        ({"*:*"}, True),
        ({"record:read", "asset:delete"}, False),
        (set(), False),
    ],
)
async def test_has_delete_permission(permissions, expected) -> None:
    """Exact code and resource/global wildcards grant delete."""
    authorizer = PermissionDeleteAuthorizer("record:delete")
    caller = Caller(identity="u1", permissions=frozenset(permissions))
    assert await authorizer.has_delete_permission(caller) is expected


def test_malformed_permission_code_rejected() -> None:
    with pytest.raises(ValueError):
        PermissionDeleteAuthorizer("delete")
