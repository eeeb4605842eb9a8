"""Authorization service: delete-permission check for manual reaps."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from reaper.application.dtos.caller import Caller


class PermissionDeleteAuthorizer:
    """Grants delete when the caller holds resource:action, resource:* or *:*."""

    def __init__(self, permission_code: str = "record:delete") -> None:
        resource, _, action = permission_code.partition(":")
        if not resource or not action:
            raise ValueError(
                f"permission_code must look like 'resource:action', got {permission_code!r}"
            )
        self.resource = resource
        self.action = action

    def check_permission(self, permissions: frozenset[str]) -> bool:
        """Return True if permissions include the code or a wildcard covering it."""
        code = f"{self.resource}:{self.action}"
        if code in permissions:
            return True
        if f"{self.resource}:*" in permissions or "*:*" in permissions:
            return True
        return False

    async def has_delete_permission(self, caller: "Caller") -> bool:
        return self.check_permission(caller.permissions)
