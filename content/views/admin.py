# content/views/admin.py

"""
CONTENT ADMIN VIEWS

Purpose:
- Site settings (CRUD + bulk upsert by key)
- Homepage sections (CRUD by section_name + upsert)
- Payment settings (admin only, secrets masked)
- Challan/quotation templates (+ set default)
- Feedback moderation
- Media upload into default storage

All endpoints require staff capabilities; the storefront reads through
/api/public/.
"""

import logging

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from backend.api_errors import error_response
from content.models import ChallanTemplate, Feedback, HomepageContent, SiteSetting
from content.serializers import (
    ChallanTemplateSerializer,
    FeedbackSerializer,
    HomepageContentSerializer,
    PaymentSettingInputSerializer,
    SiteSettingSerializer,
    SiteSettingUpsertSerializer,
)
from content.services import challan_templates, payment_settings, site_settings
from permissions.roles import (
    CAP_CATALOG_EDIT,
    CAP_CONTENT_EDIT,
    CAP_PAYMENTS_CONFIGURE,
    CapabilityByActionMixin,
    HasAnyCapability,
    HasCapability,
)
from products.services.exceptions import MediaValidationError
from products.services.media import upload_media

logger = logging.getLogger(__name__)


class ContentCapabilityMixin(CapabilityByActionMixin):
    read_capability = CAP_CONTENT_EDIT
    write_capability = CAP_CONTENT_EDIT


# =====================================================
# SITE SETTINGS
# =====================================================

class SiteSettingViewSet(ContentCapabilityMixin, viewsets.ModelViewSet):
    queryset = SiteSetting.objects.all()
    serializer_class = SiteSettingSerializer
    search_fields = ["key", "description"]
    ordering = ["key"]

    @extend_schema(
        request=SiteSettingUpsertSerializer,
        responses={200: SiteSettingSerializer(many=True)},
        description="Create or update many settings by key in one request.",
    )
    @action(detail=False, methods=["post"], url_path="bulk")
    def bulk(self, request):
        s = SiteSettingUpsertSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        rows = site_settings.upsert_settings(s.validated_data["settings"])
        return Response(SiteSettingSerializer(rows, many=True).data, status=status.HTTP_200_OK)


# =====================================================
# HOMEPAGE
# =====================================================

class HomepageContentViewSet(ContentCapabilityMixin, viewsets.ModelViewSet):
    queryset = HomepageContent.objects.all()
    serializer_class = HomepageContentSerializer
    lookup_field = "section_name"
    ordering = ["section_name"]

    @extend_schema(
        request=HomepageContentSerializer,
        responses={200: HomepageContentSerializer},
        description="Create or replace a homepage section by section_name.",
    )
    @action(detail=False, methods=["post"], url_path="upsert")
    def upsert(self, request):
        section = (request.data.get("section_name") or "").strip()
        instance = HomepageContent.objects.filter(section_name=section).first()

        s = HomepageContentSerializer(instance, data=request.data)
        s.is_valid(raise_exception=True)
        s.save()
        return Response(s.data, status=status.HTTP_200_OK)


# =====================================================
# PAYMENT SETTINGS (ADMIN ONLY)
# =====================================================

class PaymentSettingsView(APIView):
    """
    GET: all known keys, secrets masked
    PUT: bulk upsert; a masked secret sent back leaves the stored one intact
    """

    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_PAYMENTS_CONFIGURE

    @extend_schema(responses={200: OpenApiResponse(description="[{key, value, is_secret, is_set}]")})
    def get(self, request):
        return Response({"results": payment_settings.admin_payment_settings()})

    @extend_schema(
        request=PaymentSettingInputSerializer,
        responses={200: OpenApiResponse(description="Masked settings after update")},
    )
    def put(self, request):
        s = PaymentSettingInputSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        written = payment_settings.upsert_payment_settings(s.validated_data["settings"])
        return Response(
            {"updated": written, "results": payment_settings.admin_payment_settings()},
            status=status.HTTP_200_OK,
        )


# =====================================================
# CHALLAN TEMPLATES
# =====================================================

class ChallanTemplateViewSet(ContentCapabilityMixin, viewsets.ModelViewSet):
    queryset = ChallanTemplate.objects.all()
    serializer_class = ChallanTemplateSerializer
    filterset_fields = ["template_type", "is_default"]
    ordering = ["-is_default", "name"]

    @action(detail=True, methods=["post"], url_path="set-default")
    def set_default(self, request, pk=None):
        template = challan_templates.set_default(self.get_object())
        return Response(self.get_serializer(template).data, status=status.HTTP_200_OK)

    @action(detail=False, methods=["get"], url_path="default")
    def default(self, request):
        template_type = request.query_params.get("template_type") or ChallanTemplate.TYPE_CHALLAN
        if template_type not in dict(ChallanTemplate.TYPE_CHOICES):
            return error_response(
                code="INVALID_TEMPLATE_TYPE",
                message="template_type must be challan or quotation.",
                http_status=status.HTTP_400_BAD_REQUEST,
            )
        template = challan_templates.get_default_template(template_type)
        return Response(self.get_serializer(template).data, status=status.HTTP_200_OK)


# =====================================================
# FEEDBACK MODERATION
# =====================================================

class FeedbackAdminViewSet(ContentCapabilityMixin, viewsets.ModelViewSet):
    queryset = Feedback.objects.all()
    serializer_class = FeedbackSerializer
    filterset_fields = ["verified", "rating"]
    search_fields = ["name", "comment"]
    ordering_fields = ["created_at", "rating"]
    ordering = ["-created_at"]


# =====================================================
# MEDIA UPLOAD
# =====================================================

class MediaUploadView(APIView):
    """
    POST multipart {file, folder?} -> {path, url, kind}
    """

    permission_classes = [IsAuthenticated, HasAnyCapability]
    required_any_capabilities = {CAP_CATALOG_EDIT, CAP_CONTENT_EDIT}
    parser_classes = [MultiPartParser, FormParser]

    ALLOWED_FOLDERS = {"uploads", "products", "categories", "gift-boxes", "homepage", "payments"}

    def post(self, request):
        upload = request.FILES.get("file")
        if not upload:
            return error_response(
                code="FILE_REQUIRED",
                message="Attach an image or video as 'file'.",
                http_status=status.HTTP_400_BAD_REQUEST,
            )

        folder = (request.data.get("folder") or "uploads").strip().strip("/")
        if folder not in self.ALLOWED_FOLDERS:
            folder = "uploads"

        try:
            result = upload_media(upload, folder=folder)
        except MediaValidationError as exc:
            return error_response(
                code="INVALID_MEDIA",
                message=str(exc),
                http_status=status.HTTP_400_BAD_REQUEST,
            )

        return Response(result, status=status.HTTP_201_CREATED)
