"""
Media ingest: buffer an uploaded image, store it and resolve its public URL.

Two backends: local disk (served from ``/uploads``) and an S3-compatible
bucket through boto3. A storage failure aborts the entity write; files that
were stored before a failed database write are not cleaned up.
"""

import logging
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

import config
from errors import StorageError, ValidationError

logger = logging.getLogger(__name__)

# Allowed image types for uploads
ALLOWED_IMAGE_TYPES = [
    "image/png",
    "image/jpeg",
    "image/jpg",
    "image/webp",
    "image/gif",
    "image/bmp",
    "image/svg+xml",
]

DANGEROUS_CHARS = ['..', '/', '\\', '<', '>', ':', '"', '|', '?', '*']


def build_object_name(filename: str) -> str:
    """Timestamp-prefixed name so repeated uploads never collide."""
    return f"{int(time.time() * 1000)}_{filename.replace(' ', '_')}"


class MediaStorage(ABC):
    @abstractmethod
    def save(self, folder: str, filename: str, content: bytes, content_type: str) -> str:
        """Store ``content`` under ``folder`` and return its public URL."""


class LocalDiskStorage(MediaStorage):
    def __init__(self, upload_dir: str, server_url: str):
        self.upload_dir = Path(upload_dir)
        self.server_url = server_url.rstrip("/")

    def save(self, folder: str, filename: str, content: bytes, content_type: str) -> str:
        name = build_object_name(filename)
        target = self.upload_dir / folder
        target.mkdir(parents=True, exist_ok=True)
        (target / name).write_bytes(content)
        logger.info(f"Stored {len(content)} bytes at {target / name}")
        return f"{self.server_url}/uploads/{folder}/{name}"


class S3Storage(MediaStorage):
    def __init__(
        self,
        bucket: str,
        endpoint_url: Optional[str] = None,
        access_key_id: Optional[str] = None,
        secret_access_key: Optional[str] = None,
        region: str = "us-east-1",
        public_url: Optional[str] = None,
        client=None,
    ):
        self.bucket = bucket
        self.endpoint_url = endpoint_url
        self.region = region
        self.public_url = public_url
        self.client = client or boto3.client(
            "s3",
            endpoint_url=endpoint_url,
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
            region_name=region,
            config=Config(signature_version="s3v4"),
        )

    def resolve_url(self, key: str) -> str:
        # Orden: URL pública configurada, endpoint propio, dominio estándar de S3
        if self.public_url:
            return f"{self.public_url.rstrip('/')}/{key}"
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket}/{key}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    def save(self, folder: str, filename: str, content: bytes, content_type: str) -> str:
        key = f"{folder}/{build_object_name(filename)}"
        self.client.put_object(Bucket=self.bucket, Key=key, Body=content, ContentType=content_type)
        logger.info(f"Uploaded {key} to bucket {self.bucket}")
        return self.resolve_url(key)


def get_storage() -> MediaStorage:
    if config.STORAGE_BACKEND == "s3":
        return S3Storage(
            bucket=config.STORAGE_BUCKET,
            endpoint_url=config.STORAGE_ENDPOINT_URL,
            access_key_id=config.STORAGE_ACCESS_KEY_ID,
            secret_access_key=config.STORAGE_SECRET_ACCESS_KEY,
            region=config.STORAGE_REGION,
            public_url=config.STORAGE_PUBLIC_URL,
        )
    return LocalDiskStorage(config.UPLOAD_DIR, config.SERVER_URL)


async def ingest_image(storage: MediaStorage, folder: str, upload: Optional[UploadFile]) -> Optional[str]:
    """Store ``upload`` under ``folder`` and return its URL, or ``None`` without a file."""
    if upload is None or not getattr(upload, "filename", None):
        return None

    if upload.content_type not in ALLOWED_IMAGE_TYPES:
        raise ValidationError("Tipo de archivo inválido. Solo se permiten imágenes")
    for char in DANGEROUS_CHARS:
        if char in upload.filename:
            logger.warning(f"Dangerous character '{char}' detected in filename: '{upload.filename}'")
            raise ValidationError("Nombre de archivo inválido")

    content = await upload.read()
    try:
        return await run_in_threadpool(storage.save, folder, upload.filename, content, upload.content_type)
    except (OSError, BotoCoreError, ClientError) as e:
        logger.error(f"Failed to store image in {folder}: {e}")
        raise StorageError() from e
