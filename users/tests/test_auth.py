# users/tests/test_auth.py

"""
AUTH API TESTS

Run with:
    python manage.py test users -v 2
"""

from datetime import timedelta

from django.conf import settings
from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

User = get_user_model()

REGISTER_URL = "/api/auth/register/"
LOGIN_URL = "/api/auth/login/"
LOGOUT_URL = "/api/auth/logout/"
ME_URL = "/api/auth/me/"
CHANGE_PASSWORD_URL = "/api/auth/change-password/"


class UserManagerTests(TestCase):
    def test_username_derived_from_email(self):
        user = User.objects.create_user(email="ravi@example.com", password="secret12")
        self.assertEqual(user.username, "ravi")
        self.assertEqual(user.role, User.ROLE_CUSTOMER)
        self.assertFalse(user.is_staff)

    def test_username_collision_gets_suffix(self):
        User.objects.create_user(email="ravi@example.com", password="secret12")
        other = User.objects.create_user(email="ravi@other.com", password="secret12")
        self.assertEqual(other.username, "ravi2")

    def test_console_roles_are_staff(self):
        manager = User.objects.create_user(email="m@example.com", password="secret12", role="manager")
        self.assertTrue(manager.is_staff)
        self.assertTrue(manager.is_console_user)

    def test_superuser_is_admin(self):
        admin = User.objects.create_superuser(email="root@example.com", password="secret12")
        self.assertEqual(admin.role, User.ROLE_ADMIN)
        self.assertTrue(admin.is_superuser)


class AuthApiTests(TestCase):
    """
    GUARANTEES:
    - public registration always creates customers
    - login works with email or username
    - logout blacklists the refresh token
    """

    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_user(
            email="owner@example.com",
            username="owner",
            password="secret12",
            role="admin",
        )

    def test_register_forces_customer_role(self):
        resp = self.client.post(
            REGISTER_URL,
            {"email": "New@Example.com", "password": "secret12", "role": "admin"},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.data["user"]["role"], "customer")
        self.assertIn("access", resp.data)
        self.assertEqual(User.objects.get(email="new@example.com").role, "customer")

    def test_register_duplicate_email(self):
        resp = self.client.post(
            REGISTER_URL,
            {"email": "OWNER@example.com", "password": "secret12"},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

    def test_login_with_email_returns_role(self):
        resp = self.client.post(LOGIN_URL, {"identifier": "owner@example.com", "password": "secret12"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["user"]["role"], "admin")
        self.assertIn("refresh", resp.data)

    def test_login_with_username(self):
        resp = self.client.post(LOGIN_URL, {"identifier": "OWNER", "password": "secret12"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)

    def test_login_bad_password(self):
        resp = self.client.post(LOGIN_URL, {"identifier": "owner", "password": "nope"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_me_requires_auth(self):
        self.assertEqual(self.client.get(ME_URL).status_code, status.HTTP_401_UNAUTHORIZED)

        self.client.force_authenticate(self.admin)
        resp = self.client.get(ME_URL)
        self.assertEqual(resp.data["email"], "owner@example.com")
        self.assertTrue(resp.data["is_console_user"])
        self.assertIn("payments.configure", resp.data["capabilities"])

    def test_logout_blacklists_refresh(self):
        refresh = str(RefreshToken.for_user(self.admin))
        self.client.force_authenticate(self.admin)

        resp = self.client.post(LOGOUT_URL, {"refresh": refresh}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_205_RESET_CONTENT)

        resp = self.client.post(LOGOUT_URL, {"refresh": refresh}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

    def test_change_password(self):
        self.client.force_authenticate(self.admin)
        resp = self.client.post(
            CHANGE_PASSWORD_URL,
            {"current_password": "secret12", "new_password": "newpass99", "confirm_password": "newpass99"},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.admin.refresh_from_db()
        self.assertTrue(self.admin.check_password("newpass99"))

    def test_change_password_mismatch(self):
        self.client.force_authenticate(self.admin)
        resp = self.client.post(
            CHANGE_PASSWORD_URL,
            {"current_password": "secret12", "new_password": "newpass99", "confirm_password": "other999"},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)


class SessionLifetimeTests(TestCase):
    def test_refresh_lifetime_matches_admin_session(self):
        jwt = settings.SIMPLE_JWT
        self.assertEqual(jwt["REFRESH_TOKEN_LIFETIME"], timedelta(hours=settings.ADMIN_SESSION_HOURS))
        self.assertFalse(jwt["ROTATE_REFRESH_TOKENS"])
