"""
PATH: content/models/__init__.py
"""

from .challan_template import ChallanTemplate
from .feedback import Feedback
from .homepage_content import HomepageContent
from .notification_dismissal import NotificationDismissal
from .payment_setting import PaymentSetting
from .site_setting import SiteSetting

__all__ = [
    "ChallanTemplate",
    "Feedback",
    "HomepageContent",
    "NotificationDismissal",
    "PaymentSetting",
    "SiteSetting",
]
