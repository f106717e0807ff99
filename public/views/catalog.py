# public/views/catalog.py
"""
PUBLIC CATALOG (STOREFRONT)

GET /api/public/catalog/?category=&user_for=&featured=&q=
GET /api/public/products/<product_code>/
GET /api/public/gift-boxes/

Rules:
- AllowAny (public)
- Only active categories, products and gift boxes
- category filter accepts a category id or name
"""

from __future__ import annotations

import uuid

from django.db.models import Count, Q
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from backend.api_errors import error_response
from products.models import Category, GiftBox, Product
from products.serializers import GiftBoxSerializer
from public.serializers import PublicCategorySerializer, PublicProductSerializer
from public.views.throttles import PublicCatalogThrottle

TRUE_VALUES = {"true", "1", "yes"}


def active_products(params):
    qs = Product.objects.filter(status=Product.STATUS_ACTIVE).select_related("category")
    qs = qs.filter(Q(category__isnull=True) | Q(category__status=Category.STATUS_ACTIVE))

    category = (params.get("category") or "").strip()
    if category:
        try:
            qs = qs.filter(category_id=uuid.UUID(category))
        except ValueError:
            qs = qs.filter(category__name__iexact=category)

    user_for = (params.get("user_for") or "").strip()
    if user_for:
        qs = qs.filter(user_for__iexact=user_for)

    if (params.get("featured") or "").strip().lower() in TRUE_VALUES:
        qs = qs.filter(featured=True)

    q = (params.get("q") or "").strip()
    if q:
        qs = qs.filter(
            Q(product_name__icontains=q) | Q(product_code__icontains=q) | Q(description__icontains=q)
        )

    return qs


def active_categories():
    return (
        Category.objects.filter(status=Category.STATUS_ACTIVE)
        .annotate(product_count=Count("products", filter=Q(products__status=Product.STATUS_ACTIVE)))
        .order_by("display_order", "name")
    )


class PublicCatalogView(APIView):
    permission_classes = [AllowAny]
    throttle_classes = [PublicCatalogThrottle]

    @extend_schema(
        tags=["Public"],
        parameters=[
            OpenApiParameter("category", str, OpenApiParameter.QUERY, description="Category id or name"),
            OpenApiParameter("user_for", str, OpenApiParameter.QUERY, description="Family / Adult / Kids"),
            OpenApiParameter("featured", bool, OpenApiParameter.QUERY),
            OpenApiParameter("q", str, OpenApiParameter.QUERY, description="Search name, code, description"),
        ],
        responses={200: OpenApiResponse(description="{categories, products}")},
    )
    def get(self, request, *args, **kwargs):
        return Response(
            {
                "categories": PublicCategorySerializer(active_categories(), many=True).data,
                "products": PublicProductSerializer(active_products(request.query_params), many=True).data,
            },
            status=status.HTTP_200_OK,
        )


class PublicProductDetailView(APIView):
    permission_classes = [AllowAny]
    throttle_classes = [PublicCatalogThrottle]

    @extend_schema(tags=["Public"], responses={200: PublicProductSerializer, 404: OpenApiResponse(description="Not found")})
    def get(self, request, product_code, *args, **kwargs):
        product = active_products({}).filter(product_code=product_code.strip().upper()).first()
        if product is None:
            return error_response(
                code="PRODUCT_NOT_FOUND",
                message="Product not found",
                http_status=status.HTTP_404_NOT_FOUND,
            )
        return Response(PublicProductSerializer(product).data)


class PublicGiftBoxListView(APIView):
    permission_classes = [AllowAny]
    throttle_classes = [PublicCatalogThrottle]

    @extend_schema(tags=["Public"], responses={200: GiftBoxSerializer(many=True)})
    def get(self, request, *args, **kwargs):
        boxes = GiftBox.objects.filter(status=GiftBox.STATUS_ACTIVE).order_by("display_order", "-created_at")
        return Response(GiftBoxSerializer(boxes, many=True).data)
