"""Filesystem-backed object storage for recipe photos.

Objects live under ``<root>/<bucket>/<key>``. Private buckets are read
through short-lived signed URLs; public buckets also expose a stable URL.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from pathlib import Path, PurePosixPath
from typing import Iterable, List, Optional
from urllib.parse import quote

from jose import ExpiredSignatureError, JWTError, jwt

from app.config import settings

logger = logging.getLogger("mealgrid.storage")

_TOKEN_ALGORITHM = "HS256"


class StorageError(Exception):
    """Raised for invalid object keys and failed storage operations."""


class LocalObjectStorage:
    def __init__(
        self,
        root: str,
        bucket: str,
        base_url: str,
        secret: str,
        public: bool = False,
    ):
        self.root = Path(root)
        self.bucket = bucket
        self.base_url = base_url.rstrip("/")
        self.public = public
        self._secret = secret
        self._bucket_dir = (self.root / bucket).resolve()

    # ------------------ Keys ------------------
    def _normalize_key(self, path: str) -> str:
        if not path or not path.strip():
            raise StorageError("Empty object path")
        key = PurePosixPath(path.strip())
        if key.is_absolute() or any(part in ("..", ".") for part in key.parts):
            raise StorageError(f"Invalid object path: {path!r}")
        return str(key)

    def resolve(self, path: str) -> Path:
        """Filesystem location of ``path``; traversal outside the bucket is rejected"""
        key = self._normalize_key(path)
        target = (self._bucket_dir / key).resolve()
        if self._bucket_dir not in target.parents:
            raise StorageError(f"Invalid object path: {path!r}")
        return target

    # ------------------ Objects ------------------
    def upload(self, path: str, content: bytes, content_type: Optional[str] = None) -> str:
        """Store ``content`` under ``path`` (overwrites nothing) and return the key"""
        target = self.resolve(path)
        if target.exists():
            raise StorageError(f"Object already exists: {path}")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
        except OSError as exc:
            raise StorageError(f"Upload failed for {path}: {exc}") from exc
        logger.info(
            "object_uploaded bucket=%s path=%s bytes=%d content_type=%s",
            self.bucket, path, len(content), content_type,
        )
        return self._normalize_key(path)

    def remove(self, paths: Iterable[str]) -> List[str]:
        """Delete objects; missing ones are ignored. Returns the keys actually removed."""
        removed = []
        for path in paths:
            target = self.resolve(path)
            try:
                target.unlink()
            except FileNotFoundError:
                continue
            except OSError as exc:
                raise StorageError(f"Remove failed for {path}: {exc}") from exc
            removed.append(path)
        if removed:
            logger.info("objects_removed bucket=%s count=%d", self.bucket, len(removed))
        return removed

    def exists(self, path: str) -> bool:
        return self.resolve(path).is_file()

    def open(self, path: str) -> bytes:
        target = self.resolve(path)
        if not target.is_file():
            raise StorageError(f"Object not found: {path}")
        return target.read_bytes()

    # ------------------ URLs ------------------
    def _object_url(self, prefix: str, key: str) -> str:
        return f"{self.base_url}/{prefix}/{quote(self.bucket)}/{quote(key)}"

    def create_signed_url(self, path: str, expires_in: int) -> str:
        key = self._normalize_key(path)
        expires = datetime.now(timezone.utc) + timedelta(seconds=expires_in)
        token = jwt.encode(
            {"bucket": self.bucket, "path": key, "exp": expires},
            self._secret,
            algorithm=_TOKEN_ALGORITHM,
        )
        return f"{self._object_url('storage', key)}?token={token}"

    def verify_token(self, token: str, path: str) -> bool:
        """True when ``token`` was signed for this bucket and path and has not expired"""
        try:
            claims = jwt.decode(token, self._secret, algorithms=[_TOKEN_ALGORITHM])
        except ExpiredSignatureError:
            logger.info("signed_url_expired bucket=%s path=%s", self.bucket, path)
            return False
        except JWTError:
            return False
        try:
            key = self._normalize_key(path)
        except StorageError:
            return False
        return claims.get("bucket") == self.bucket and claims.get("path") == key

    def get_public_url(self, path: str) -> Optional[str]:
        if not self.public:
            return None
        return self._object_url("storage/public", self._normalize_key(path))


@lru_cache(maxsize=1)
def get_storage() -> LocalObjectStorage:
    """Process-wide storage built from settings"""
    return LocalObjectStorage(
        root=settings.storage_root,
        bucket=settings.storage_bucket,
        base_url=settings.storage_base_url,
        secret=settings.jwt_secret,
        public=settings.storage_public,
    )
