"""
Media storage for images and videos uploaded through the admin panel.

Uploads are validated before any network call, written under a generated
key and returned as a public URL. Deletes take that URL back, and never
raise: cleanup of orphaned media must not block document deletes.
"""

import asyncio
import logging
import random
import string
import time
from dataclasses import dataclass, field
from typing import List, Optional

from botocore.exceptions import BotoCoreError, ClientError

from mandala_cms.config.settings import Settings
from mandala_cms.errors import MediaTooLarge, UnsupportedMediaType, UploadFailed
from mandala_cms.s3.client import create_s3_client
from mandala_cms.s3.delete_objects import delete_s3_object
from mandala_cms.s3.urls import object_key_to_url, public_base_url, url_to_object_key
from mandala_cms.s3.write_objects import upload_s3_object
from mandala_cms.utils.decorators import async_log_execution_time

logger = logging.getLogger(__name__)

MAX_IMAGE_SIZE = 5 * 1024 * 1024  # 5MB
MAX_VIDEO_SIZE = 50 * 1024 * 1024  # 50MB

IMAGE = "image"
VIDEO = "video"

KEY_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits
KEY_SUFFIX_LENGTH = 6


@dataclass
class MediaUpload:
    """A file received from the admin panel"""
    filename: str
    content_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass
class MediaCleanupOutcome:
    """Result of best-effort media deletion tied to a document delete"""
    attempted: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return not self.failed


def classify_media(content_type: Optional[str]) -> str:
    """Return IMAGE or VIDEO for a declared content type"""
    content_type = (content_type or "").lower()
    if content_type.startswith("image/"):
        return IMAGE
    if content_type.startswith("video/"):
        return VIDEO
    raise UnsupportedMediaType(content_type)


def validate_upload(upload: MediaUpload) -> str:
    """Check type and size ceilings; returns the media kind"""
    kind = classify_media(upload.content_type)
    max_size, label = (MAX_IMAGE_SIZE, "5MB") if kind == IMAGE else (MAX_VIDEO_SIZE, "50MB")
    if upload.size > max_size:
        raise MediaTooLarge(upload.size, max_size, label)
    return kind


def build_object_key(logical_path: str, filename: str) -> str:
    """
    ``{logical_path}/{epoch_millis}-{suffix}.{extension}``

    The random suffix only separates uploads landing in the same
    millisecond; it is not a secret.
    """
    extension = filename.rsplit(".", 1)[-1]
    suffix = "".join(random.choices(KEY_SUFFIX_ALPHABET, k=KEY_SUFFIX_LENGTH))
    return f"{logical_path.strip('/')}/{int(time.time() * 1000)}-{suffix}.{extension}"


class MediaStorage:
    """Uploads and deletes media blobs in an S3 bucket"""

    def __init__(self, s3_client, bucket_name: str, base_url: str):
        self.s3_client = s3_client
        self.bucket_name = bucket_name
        self.base_url = base_url

    @classmethod
    def from_settings(cls, settings: Settings) -> "MediaStorage":
        base_url = public_base_url(
            bucket_name=settings.s3_bucket_name,
            region=settings.aws_region,
            endpoint_url=settings.aws_endpoint_url,
            override=settings.media_public_base_url,
        )
        return cls(create_s3_client(settings), settings.s3_bucket_name, base_url)

    @async_log_execution_time
    async def upload_media(self, upload: MediaUpload, logical_path: str) -> str:
        """Validate and store a file, returning its public URL"""
        validate_upload(upload)
        object_key = build_object_key(logical_path, upload.filename)

        try:
            await asyncio.to_thread(
                upload_s3_object,
                bucket_name=self.bucket_name,
                object_key=object_key,
                file_content=upload.content,
                s3_client=self.s3_client,
                content_type=upload.content_type,
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Upload of {upload.filename} to {object_key} failed: {e}")
            raise UploadFailed(f"Failed to upload {upload.filename}") from e

        logger.info(f"Uploaded {upload.filename} ({upload.size} bytes) as {object_key}")
        return object_key_to_url(self.base_url, object_key)

    def owns_url(self, url: str) -> bool:
        return url_to_object_key(self.base_url, url) is not None

    async def delete_file(self, url: str) -> bool:
        """
        Delete the object behind a URL issued by ``upload_media``.

        Empty and foreign URLs are ignored. An object that is already gone
        counts as deleted. Any other failure is logged and reported by
        returning False instead of raising.
        """
        object_key = url_to_object_key(self.base_url, url)
        if object_key is None:
            if url:
                logger.debug(f"Skipping delete of URL not issued by this storage: {url}")
            return True

        try:
            deleted = await asyncio.to_thread(
                delete_s3_object, self.bucket_name, object_key, self.s3_client
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to delete {object_key} from storage: {e}")
            return False

        if deleted:
            logger.info(f"Deleted media object {object_key}")
        else:
            logger.warning(f"File not found in storage, skipping deletion: {url}")
        return True

    async def check_bucket(self) -> None:
        """Raise if the bucket cannot be reached with the configured credentials"""
        await asyncio.to_thread(self.s3_client.head_bucket, Bucket=self.bucket_name)
