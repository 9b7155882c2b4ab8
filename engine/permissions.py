"""
Module 06 - Engine Permissions

Role gating for the two administrative mutations:
- SET_VESTING_WINDOW_MERKLE_ROOT_ROLE guards root publication
- INCREASE_NON_VESTED_ROLE guards allowance top-ups
"""
from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Iterable, Optional

from core.schemas.errors import PermissionDeniedException
from core.schemas.window import normalize_address


logger = logging.getLogger(__name__)


class Role(str, Enum):
    """Administrative roles."""
    SET_VESTING_WINDOW_MERKLE_ROOT = "SET_VESTING_WINDOW_MERKLE_ROOT_ROLE"
    INCREASE_NON_VESTED = "INCREASE_NON_VESTED_ROLE"


class RolePermissions:
    """Role -> set of checksum addresses allowed to exercise it."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._members: dict[Role, set[str]] = {role: set() for role in Role}

    @classmethod
    def with_admins(cls, admins: Iterable[str]) -> "RolePermissions":
        """Grant every role to each of `admins`."""
        permissions = cls()
        for admin in admins:
            for role in Role:
                permissions.grant(role, admin)
        return permissions

    def grant(self, role: Role, account: str) -> None:
        key = normalize_address(account)
        with self._lock:
            self._members[role].add(key)
        logger.info(f"Granted {role.value} to {key}")

    def revoke(self, role: Role, account: str) -> None:
        key = normalize_address(account)
        with self._lock:
            self._members[role].discard(key)
        logger.info(f"Revoked {role.value} from {key}")

    def has_role(self, role: Role, account: Optional[str]) -> bool:
        if account is None:
            return False
        try:
            key = normalize_address(account)
        except ValueError:
            return False
        with self._lock:
            return key in self._members[role]

    def require(self, role: Role, account: Optional[str]) -> None:
        """
        Raises:
            PermissionDeniedException: If `account` lacks `role`
        """
        if not self.has_role(role, account):
            raise PermissionDeniedException(role.value, account)

    def members(self, role: Role) -> list[str]:
        with self._lock:
            return sorted(self._members[role])
