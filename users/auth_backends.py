"""
PATH: users/auth_backends.py

AUTH BACKEND: email OR username login

- identifier containing "@" is looked up as email, anything else as username
- supplying both email= and username= explicitly is rejected
- inactive users never authenticate

Used by Django admin login, SimpleJWT's TokenObtainPairView and the
console LoginView (all go through django.contrib.auth.authenticate).
"""

from __future__ import annotations

import logging

from django.contrib.auth import get_user_model
from django.contrib.auth.backends import BaseBackend

logger = logging.getLogger(__name__)


class EmailOrUsernameBackend(BaseBackend):
    def authenticate(self, request, username=None, password=None, **kwargs):
        email_kw = (kwargs.get("email") or "").strip()
        username_kw = (kwargs.get("username") or "").strip()

        if email_kw and username_kw:
            return None

        identifier = (username or email_kw or username_kw or "").strip()
        if not identifier or password is None:
            return None

        User = get_user_model()
        lookup = {"email__iexact": identifier} if "@" in identifier else {"username__iexact": identifier}

        user = User.objects.filter(**lookup).first()
        if user is None or not user.is_active:
            return None

        if not user.check_password(password):
            logger.info("Login rejected: bad password", extra={"user_id": str(user.pk)})
            return None

        return user

    def get_user(self, user_id):
        User = get_user_model()
        return User.objects.filter(pk=user_id).first()
