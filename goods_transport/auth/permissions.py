# goods_transport/auth/permissions.py

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Union
import logging

from goods_transport.core.exceptions import AuthorizationError
from goods_transport.models.shared.enums import UserRole

logger = logging.getLogger(__name__)


class Permission(str, Enum):
    MASTER_DATA_WRITE = "MASTER_DATA_WRITE"
    REPORTS_VIEW = "REPORTS_VIEW"
    CORE_OPERATIONS = "CORE_OPERATIONS"
    FINANCE_WRITE = "FINANCE_WRITE"
    DELIVERY_APPROVAL_ADMIN = "DELIVERY_APPROVAL_ADMIN"
    DELIVERY_APPROVAL_SUPERADMIN = "DELIVERY_APPROVAL_SUPERADMIN"
    LABOUR_MANAGEMENT = "LABOUR_MANAGEMENT"


ALL_ROLES = frozenset({UserRole.OPERATOR, UserRole.ADMIN, UserRole.SUPERADMIN})
ADMIN_ROLES = frozenset({UserRole.ADMIN, UserRole.SUPERADMIN})

ROLE_PERMISSIONS: Dict[Permission, FrozenSet[UserRole]] = {
    Permission.MASTER_DATA_WRITE: ADMIN_ROLES,
    Permission.REPORTS_VIEW: ALL_ROLES,
    Permission.CORE_OPERATIONS: ALL_ROLES,
    Permission.FINANCE_WRITE: ADMIN_ROLES,
    Permission.DELIVERY_APPROVAL_ADMIN: ADMIN_ROLES,
    Permission.DELIVERY_APPROVAL_SUPERADMIN: frozenset({UserRole.SUPERADMIN}),
    Permission.LABOUR_MANAGEMENT: ADMIN_ROLES,
}


@dataclass(frozen=True)
class PolicyDecision:
    authorized: bool
    reason: str


class PolicyEngine:
    """
    Single place where role/permission decisions are made.

    Every protected endpoint asks the engine through require_permission()
    instead of comparing roles inline.
    """

    def __init__(self, role_permissions: Dict[Permission, FrozenSet[UserRole]] = None):
        self.role_permissions = role_permissions or ROLE_PERMISSIONS

    def evaluate(self, role: Union[UserRole, str, None], permission: Permission) -> PolicyDecision:
        if role is None:
            return PolicyDecision(False, "Authorization required: No role assigned.")
        try:
            role = UserRole(role)
        except ValueError:
            return PolicyDecision(False, f"Authorization required: Unknown role {role}.")

        allowed = self.role_permissions.get(permission, frozenset())
        if role in allowed:
            return PolicyDecision(True, f"Role {role.value} holds {permission.value}")

        logger.debug(f"Permission denied: {role.value} lacks {permission.value}")
        return PolicyDecision(
            False,
            f"Authorization required: {role.value} role cannot perform {permission.value}.",
        )

    def require(self, role: Union[UserRole, str, None], permission: Permission) -> None:
        """Raise AuthorizationError when the decision is a denial"""
        decision = self.evaluate(role, permission)
        if not decision.authorized:
            logger.warning(f"Permission check failed: {decision.reason}")
            raise AuthorizationError(decision.reason)


policy_engine = PolicyEngine()
