# products/views/product.py

"""
PRODUCT VIEWSET

Purpose:
- Admin console product management (CRUD, search, filters)
- Bulk status / featured toggles
- Excel import / export / template
- Per-product media upload and zip media upload

Error shape for handled failures:
    {"error": {"code", "message"}}
"""

import logging

from django.http import HttpResponse
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response

from backend.api_errors import error_response
from permissions.roles import CapabilityByActionMixin
from products.models import Product
from products.serializers.product import (
    ProductBulkFeaturedSerializer,
    ProductBulkStatusSerializer,
    ProductSerializer,
)
from products.services import excel, media
from products.services.exceptions import ImportFileError, MediaValidationError

logger = logging.getLogger(__name__)


def _xlsx_response(content: bytes, filename: str) -> HttpResponse:
    resp = HttpResponse(content, content_type=excel.XLSX_CONTENT_TYPE)
    resp["Content-Disposition"] = f'attachment; filename="{filename}"'
    return resp


class ProductViewSet(CapabilityByActionMixin, viewsets.ModelViewSet):
    """
    Product endpoints (admin console).

    Reads need catalog.view; everything else (including exports) needs
    catalog.edit. The storefront uses /api/public/catalog/ instead.
    """

    serializer_class = ProductSerializer
    parser_classes = [JSONParser, MultiPartParser, FormParser]

    filterset_fields = ["category", "status", "featured", "user_for"]
    search_fields = ["product_code", "product_name", "description", "content"]
    ordering_fields = ["product_code", "product_name", "final_rate", "mrp", "stock", "created_at"]
    ordering = ["product_code"]

    def get_queryset(self):
        return Product.objects.select_related("category")

    # -----------------------------
    # Bulk toggles
    # -----------------------------
    @extend_schema(
        request=ProductBulkStatusSerializer,
        responses={200: OpenApiResponse(description="{updated: int}")},
    )
    @action(detail=False, methods=["post"], url_path="bulk-status")
    def bulk_status(self, request):
        s = ProductBulkStatusSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        updated = Product.objects.filter(id__in=s.validated_data["ids"]).update(
            status=s.validated_data["status"]
        )
        logger.info("Bulk product status", extra={"updated": updated})
        return Response({"updated": updated}, status=status.HTTP_200_OK)

    @extend_schema(
        request=ProductBulkFeaturedSerializer,
        responses={200: OpenApiResponse(description="{updated: int}")},
    )
    @action(detail=False, methods=["post"], url_path="bulk-featured")
    def bulk_featured(self, request):
        s = ProductBulkFeaturedSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        updated = Product.objects.filter(id__in=s.validated_data["ids"]).update(
            featured=s.validated_data["featured"]
        )
        return Response({"updated": updated}, status=status.HTTP_200_OK)

    # -----------------------------
    # Spreadsheets
    # -----------------------------
    @extend_schema(
        request={"multipart/form-data": {"type": "object", "properties": {"file": {"type": "string", "format": "binary"}}}},
        responses={
            200: OpenApiResponse(description="{created, updated, errors[]}"),
            400: OpenApiResponse(description="Missing or unreadable file"),
        },
    )
    @action(detail=False, methods=["post"], url_path="import")
    def import_excel(self, request):
        upload = request.FILES.get("file")
        if not upload:
            return error_response(
                code="FILE_REQUIRED",
                message="Attach an .xlsx file as 'file'.",
                http_status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            result = excel.import_products(upload)
        except ImportFileError as exc:
            return error_response(
                code="INVALID_FILE",
                message=str(exc),
                http_status=status.HTTP_400_BAD_REQUEST,
            )

        return Response(result, status=status.HTTP_200_OK)

    @action(detail=False, methods=["get"], url_path="export")
    def export_excel(self, request):
        qs = self.filter_queryset(self.get_queryset())
        return _xlsx_response(excel.export_products(qs), "products.xlsx")

    @action(detail=False, methods=["get"], url_path="template")
    def template(self, request):
        return _xlsx_response(excel.product_template(), "product_upload_template.xlsx")

    # -----------------------------
    # Media
    # -----------------------------
    @extend_schema(
        request={"multipart/form-data": {"type": "object", "properties": {"file": {"type": "string", "format": "binary"}}}},
        responses={200: ProductSerializer, 400: OpenApiResponse(description="Invalid media")},
    )
    @action(detail=True, methods=["post"], url_path="media")
    def upload_media(self, request, pk=None):
        product = self.get_object()
        upload = request.FILES.get("file")
        if not upload:
            return error_response(
                code="FILE_REQUIRED",
                message="Attach an image or video as 'file'.",
                http_status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            media.attach_product_media(product, upload)
        except MediaValidationError as exc:
            return error_response(
                code="INVALID_MEDIA",
                message=str(exc),
                http_status=status.HTTP_400_BAD_REQUEST,
            )

        product.refresh_from_db()
        return Response(self.get_serializer(product).data, status=status.HTTP_200_OK)

    @extend_schema(
        request={"multipart/form-data": {"type": "object", "properties": {"file": {"type": "string", "format": "binary"}}}},
        responses={200: OpenApiResponse(description="{updated[], unmatched[], errors[]}")},
    )
    @action(detail=False, methods=["post"], url_path="media-zip")
    def media_zip(self, request):
        upload = request.FILES.get("file")
        if not upload:
            return error_response(
                code="FILE_REQUIRED",
                message="Attach a .zip archive as 'file'.",
                http_status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            result = media.import_media_zip(upload)
        except MediaValidationError as exc:
            return error_response(
                code="INVALID_ARCHIVE",
                message=str(exc),
                http_status=status.HTTP_400_BAD_REQUEST,
            )

        return Response(result, status=status.HTTP_200_OK)
