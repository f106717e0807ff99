# products/services/media.py

"""
MEDIA UPLOADS

Purpose:
- Validate and store product images/videos in default_storage
- Attach media from a zip where each file stem is a product code

Rules:
- images: jpg/jpeg/png/webp, <= MEDIA_MAX_IMAGE_MB
- videos: mp4/webm/mov, <= MEDIA_MAX_VIDEO_MB
- storage is whatever STORAGES["default"] points at
- a failed validation never touches storage or the product row
"""

from __future__ import annotations

import logging
import os
import uuid
import zipfile

from django.conf import settings
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage
from django.db import transaction

from products.models import Product
from products.services.exceptions import MediaValidationError

logger = logging.getLogger(__name__)

KIND_IMAGE = "image"
KIND_VIDEO = "video"

IMAGE_EXTENSIONS = {"jpg", "jpeg", "png", "webp"}
VIDEO_EXTENSIONS = {"mp4", "webm", "mov"}

MB = 1024 * 1024


def _ext(name: str) -> str:
    return os.path.splitext(name or "")[1].lower().lstrip(".")


def max_bytes(kind: str) -> int:
    if kind == KIND_VIDEO:
        return int(getattr(settings, "MEDIA_MAX_VIDEO_MB", 50)) * MB
    return int(getattr(settings, "MEDIA_MAX_IMAGE_MB", 10)) * MB


def detect_kind(name: str) -> str | None:
    ext = _ext(name)
    if ext in IMAGE_EXTENSIONS:
        return KIND_IMAGE
    if ext in VIDEO_EXTENSIONS:
        return KIND_VIDEO
    return None


def validate_media(name: str, size: int, *, expected_kind: str | None = None) -> str:
    """
    Returns the media kind. Raises MediaValidationError.
    """
    kind = detect_kind(name)
    if kind is None:
        allowed = ", ".join(sorted(IMAGE_EXTENSIONS | VIDEO_EXTENSIONS))
        raise MediaValidationError(f"Unsupported file type for {name}. Allowed: {allowed}")

    if expected_kind and kind != expected_kind:
        raise MediaValidationError(f"{name} is not a valid {expected_kind} file")

    limit = max_bytes(kind)
    if int(size or 0) <= 0:
        raise MediaValidationError(f"{name} is empty")
    if int(size) > limit:
        raise MediaValidationError(f"{name} exceeds the {limit // MB}MB {kind} limit")

    return kind


def store_file(fileobj, *, folder: str, name: str) -> dict:
    """
    Save to default_storage under <folder>/<uuid>.<ext>.
    Returns {"path", "url"}.
    """
    target = f"{folder.strip('/')}/{uuid.uuid4().hex}.{_ext(name)}"
    path = default_storage.save(target, fileobj)
    url = default_storage.url(path)
    logger.info("Media stored", extra={"path": path})
    return {"path": path, "url": url}


def upload_media(uploaded, *, folder: str = "uploads", expected_kind: str | None = None) -> dict:
    kind = validate_media(uploaded.name, uploaded.size, expected_kind=expected_kind)
    stored = store_file(uploaded, folder=f"{folder}/{kind}s", name=uploaded.name)
    return {**stored, "kind": kind}


def _apply_to_product(product: Product, *, kind: str, url: str) -> None:
    if kind == KIND_VIDEO:
        product.video_url = url
        product.save(update_fields=["video_url", "updated_at"])
    else:
        product.image_url = url
        product.save(update_fields=["image_url", "updated_at"])


def attach_product_media(product: Product, uploaded) -> dict:
    result = upload_media(uploaded, folder=f"products/{product.product_code.lower()}")
    _apply_to_product(product, kind=result["kind"], url=result["url"])
    return result


def _is_junk(member: str) -> bool:
    parts = member.replace("\\", "/").split("/")
    return "__MACOSX" in parts or any(p.startswith(".") for p in parts if p)


def import_media_zip(fileobj) -> dict:
    """
    Each archive member named <PRODUCT_CODE>.<ext> (any folder, any case)
    becomes that product's image or video.

    Returns {"updated": [{"product_code", "kind", "url"}], "unmatched": [names],
             "errors": [{"file", "message"}]}.
    """
    try:
        archive = zipfile.ZipFile(fileobj)
    except zipfile.BadZipFile as exc:
        raise MediaValidationError("Upload a valid .zip archive") from exc

    updated: list[dict] = []
    unmatched: list[str] = []
    errors: list[dict] = []

    products = {code.upper(): pk for pk, code in Product.objects.values_list("pk", "product_code")}

    with archive:
        for info in archive.infolist():
            if info.is_dir() or _is_junk(info.filename):
                continue

            base = os.path.basename(info.filename)
            stem = os.path.splitext(base)[0].strip().upper()

            pk = products.get(stem)
            if pk is None:
                unmatched.append(base)
                continue

            try:
                kind = validate_media(base, info.file_size)
            except MediaValidationError as exc:
                errors.append({"file": base, "message": str(exc)})
                continue

            content = ContentFile(archive.read(info), name=base)
            stored = store_file(content, folder=f"products/{stem.lower()}/{kind}s", name=base)

            with transaction.atomic():
                product = Product.objects.select_for_update().get(pk=pk)
                _apply_to_product(product, kind=kind, url=stored["url"])

            updated.append({"product_code": stem, "kind": kind, "url": stored["url"]})

    logger.info(
        "Media zip processed",
        extra={"updated": len(updated), "unmatched": len(unmatched), "errors": len(errors)},
    )
    return {"updated": updated, "unmatched": unmatched, "errors": errors}
