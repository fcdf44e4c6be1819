"""Object download routes for recipe photos"""

import logging
import mimetypes

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from adapters.storage_adapter import LocalObjectStorage, StorageError
from api.dependencies import get_storage
from app.exceptions import NotFoundError, UnauthorizedError

router = APIRouter(prefix="/storage", tags=["Storage"])
logger = logging.getLogger("mealgrid.api.storage")


def _object_response(storage: LocalObjectStorage, path: str) -> Response:
    try:
        content = storage.open(path)
    except StorageError:
        raise NotFoundError(f"Object not found: {path}", code="OBJECT_NOT_FOUND")
    media_type = mimetypes.guess_type(path)[0] or "application/octet-stream"
    return Response(content=content, media_type=media_type)


def _check_bucket(storage: LocalObjectStorage, bucket: str) -> None:
    if bucket != storage.bucket:
        raise NotFoundError(f"Bucket not found: {bucket}", code="BUCKET_NOT_FOUND")


@router.get("/public/{bucket}/{path:path}")
def get_public_object(
    bucket: str,
    path: str,
    storage: LocalObjectStorage = Depends(get_storage),
):
    _check_bucket(storage, bucket)
    if not storage.public:
        raise NotFoundError(f"Bucket is not public: {bucket}", code="BUCKET_NOT_PUBLIC")
    return _object_response(storage, path)


@router.get("/{bucket}/{path:path}")
def get_signed_object(
    bucket: str,
    path: str,
    token: str = Query(..., description="Signature from a signed URL"),
    storage: LocalObjectStorage = Depends(get_storage),
):
    """Serve an object through a signed URL."""
    _check_bucket(storage, bucket)
    if not storage.verify_token(token, path):
        raise UnauthorizedError("Invalid or expired signature", code="INVALID_SIGNATURE")
    return _object_response(storage, path)
