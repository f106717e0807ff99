# permissions/tests/test_roles.py

from types import SimpleNamespace

from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from django.test import TestCase

from permissions.roles import (
    CAP_CATALOG_EDIT,
    CAP_DASHBOARD_VIEW,
    CAP_ORDERS_MANAGE,
    CAP_PAYMENTS_CONFIGURE,
    HasAnyCapability,
    HasCapability,
    IsAdmin,
    IsStaff,
    effective_capabilities_for,
    user_has_capability,
)

User = get_user_model()


def _request(user):
    return SimpleNamespace(user=user)


class CapabilityMapTests(TestCase):
    """
    GUARANTEES:
    - payment configuration is admin-only
    - staff move orders but never edit the catalog
    - customers and anonymous users have no console capabilities
    - superusers get everything regardless of role
    """

    def setUp(self):
        self.admin = User.objects.create_user(email="a@example.com", password="pass1234", role="admin")
        self.manager = User.objects.create_user(email="m@example.com", password="pass1234", role="manager")
        self.staff = User.objects.create_user(email="s@example.com", password="pass1234", role="staff")
        self.customer = User.objects.create_user(email="c@example.com", password="pass1234")

    def test_payments_admin_only(self):
        self.assertTrue(user_has_capability(self.admin, CAP_PAYMENTS_CONFIGURE))
        self.assertFalse(user_has_capability(self.manager, CAP_PAYMENTS_CONFIGURE))
        self.assertFalse(user_has_capability(self.staff, CAP_PAYMENTS_CONFIGURE))

    def test_staff_capabilities(self):
        self.assertTrue(user_has_capability(self.staff, CAP_ORDERS_MANAGE))
        self.assertTrue(user_has_capability(self.staff, CAP_DASHBOARD_VIEW))
        self.assertFalse(user_has_capability(self.staff, CAP_CATALOG_EDIT))

    def test_customer_and_anonymous(self):
        self.assertEqual(effective_capabilities_for(self.customer), set())
        self.assertFalse(user_has_capability(AnonymousUser(), CAP_DASHBOARD_VIEW))

    def test_superuser_gets_everything(self):
        root = User.objects.create_superuser(email="root@example.com", password="pass1234")
        root.role = "staff"
        self.assertTrue(user_has_capability(root, CAP_PAYMENTS_CONFIGURE))


class PermissionClassTests(TestCase):
    def setUp(self):
        self.admin = User.objects.create_user(email="a@example.com", password="pass1234", role="admin")
        self.staff = User.objects.create_user(email="s@example.com", password="pass1234", role="staff")
        self.customer = User.objects.create_user(email="c@example.com", password="pass1234")

    def test_role_classes(self):
        self.assertTrue(IsAdmin().has_permission(_request(self.admin), None))
        self.assertFalse(IsAdmin().has_permission(_request(self.staff), None))
        self.assertTrue(IsStaff().has_permission(_request(self.staff), None))
        self.assertFalse(IsStaff().has_permission(_request(self.customer), None))
        self.assertFalse(IsStaff().has_permission(_request(AnonymousUser()), None))

    def test_has_capability_denies_without_attribute(self):
        view = SimpleNamespace()
        self.assertFalse(HasCapability().has_permission(_request(self.admin), view))

        view.required_capability = CAP_ORDERS_MANAGE
        self.assertTrue(HasCapability().has_permission(_request(self.staff), view))
        self.assertFalse(HasCapability().has_permission(_request(self.customer), view))

    def test_has_any_capability(self):
        view = SimpleNamespace(required_any_capabilities={CAP_CATALOG_EDIT, CAP_DASHBOARD_VIEW})
        self.assertTrue(HasAnyCapability().has_permission(_request(self.staff), view))
        self.assertFalse(HasAnyCapability().has_permission(_request(self.customer), view))
