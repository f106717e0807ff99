# permissions/roles.py

from __future__ import annotations

from typing import Optional

from rest_framework.permissions import BasePermission


# =========================================================
# ROLE CONSTANTS (CONSOLE JOB ROLES)
# =========================================================
ROLE_ADMIN = "admin"
ROLE_MANAGER = "manager"
ROLE_STAFF = "staff"
ROLE_CUSTOMER = "customer"

STAFF_ROLES = {
    ROLE_ADMIN,
    ROLE_MANAGER,
    ROLE_STAFF,
}


# =========================================================
# CAPABILITIES (THE REAL PERMISSION LANGUAGE)
# =========================================================
# Views should protect capabilities, not raw roles.
CAP_CATALOG_VIEW = "catalog.view"
CAP_CATALOG_EDIT = "catalog.edit"          # products, categories, gift boxes, imports

CAP_ORDERS_VIEW = "orders.view"
CAP_ORDERS_MANAGE = "orders.manage"        # status, tracking, manual payment marks

CAP_CUSTOMERS_MANAGE = "customers.manage"

CAP_CONTENT_EDIT = "content.edit"          # site settings, homepage, templates, feedback

CAP_PAYMENTS_CONFIGURE = "payments.configure"  # gateway keys + bank details

CAP_DASHBOARD_VIEW = "dashboard.view"

ALL_CAPABILITIES = {
    CAP_CATALOG_VIEW,
    CAP_CATALOG_EDIT,
    CAP_ORDERS_VIEW,
    CAP_ORDERS_MANAGE,
    CAP_CUSTOMERS_MANAGE,
    CAP_CONTENT_EDIT,
    CAP_PAYMENTS_CONFIGURE,
    CAP_DASHBOARD_VIEW,
}


# =========================================================
# ROLE → CAPABILITY MAP
# =========================================================
ROLE_CAPABILITIES: dict[str, set[str]] = {
    ROLE_ADMIN: {
        *ALL_CAPABILITIES,
    },
    ROLE_MANAGER: {
        CAP_CATALOG_VIEW,
        CAP_CATALOG_EDIT,
        CAP_ORDERS_VIEW,
        CAP_ORDERS_MANAGE,
        CAP_CUSTOMERS_MANAGE,
        CAP_CONTENT_EDIT,
        CAP_DASHBOARD_VIEW,
        # payment configuration stays admin-only
    },
    ROLE_STAFF: {
        CAP_CATALOG_VIEW,
        CAP_ORDERS_VIEW,
        CAP_ORDERS_MANAGE,
        CAP_DASHBOARD_VIEW,
    },
    ROLE_CUSTOMER: set(),
}


# =========================================================
# Helpers
# =========================================================
def get_user_role(user) -> Optional[str]:
    return getattr(user, "role", None)


def effective_capabilities_for(user) -> set[str]:
    if getattr(user, "is_superuser", False):
        return set(ALL_CAPABILITIES)
    return set(ROLE_CAPABILITIES.get(get_user_role(user), set()))


def user_has_capability(user, capability: str) -> bool:
    if not user or not getattr(user, "is_authenticated", False):
        return False
    return capability in effective_capabilities_for(user)


# =========================================================
# Base Role Permission (Internal Use)
# =========================================================
class BaseRolePermission(BasePermission):
    """
    Subclasses must define:
    - allowed_roles (set)
    """

    allowed_roles: set[str] = set()

    def has_permission(self, request, view):
        user = request.user

        if not user or not user.is_authenticated:
            return False

        return get_user_role(user) in self.allowed_roles


# =========================================================
# Capability Permissions
# =========================================================
class HasCapability(BasePermission):
    """
    Require a specific capability.

    Usage:
        permission_classes = [IsAuthenticated, HasCapability]
        required_capability = CAP_ORDERS_MANAGE
    """

    def has_permission(self, request, view):
        required = getattr(view, "required_capability", None)
        if not required:
            # deny-by-default so a forgotten attribute never opens an endpoint
            return False
        return user_has_capability(request.user, required)


class HasAnyCapability(BasePermission):
    """
    Require ANY capability from a set.

    Usage:
        view.required_any_capabilities = {CAP_ORDERS_VIEW, CAP_DASHBOARD_VIEW}
    """

    def has_permission(self, request, view):
        required = getattr(view, "required_any_capabilities", None)
        if not required:
            return False
        return any(user_has_capability(request.user, cap) for cap in set(required))


class CapabilityByActionMixin:
    """
    ViewSet mixin: read actions need `read_capability`, everything else
    needs `write_capability`.
    """

    read_actions = {"list", "retrieve"}
    read_capability: str = CAP_CATALOG_VIEW
    write_capability: str = CAP_CATALOG_EDIT

    def get_permissions(self):
        action = getattr(self, "action", None)
        self.required_capability = (
            self.read_capability if action in self.read_actions else self.write_capability
        )
        return [HasCapability()]


# =========================================================
# Role Permissions
# =========================================================
class IsAdmin(BaseRolePermission):
    allowed_roles = {ROLE_ADMIN}


class IsStaff(BaseRolePermission):
    allowed_roles = STAFF_ROLES
