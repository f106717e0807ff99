from .customer import CustomerViewSet
from .dashboard import DashboardView
from .order import OrderViewSet

__all__ = ["CustomerViewSet", "DashboardView", "OrderViewSet"]
