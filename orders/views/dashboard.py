# orders/views/dashboard.py

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework.response import Response
from rest_framework.views import APIView

from orders.serializers import OrderListSerializer
from orders.services.dashboard import dashboard_stats
from permissions.roles import CAP_DASHBOARD_VIEW, HasCapability


class DashboardView(APIView):
    """
    GET /api/orders/dashboard/
    """

    permission_classes = [HasCapability]
    required_capability = CAP_DASHBOARD_VIEW

    @extend_schema(responses={200: OpenApiResponse(description="Dashboard counters + recentOrders")})
    def get(self, request):
        stats = dashboard_stats()
        stats["recentOrders"] = OrderListSerializer(stats["recentOrders"], many=True).data
        return Response(stats)
