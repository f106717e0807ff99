from .auth import ChangePasswordView, LoginView, LogoutView, RegisterView
from .me import MeView

__all__ = [
    "RegisterView",
    "LoginView",
    "LogoutView",
    "ChangePasswordView",
    "MeView",
]
