from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from supabase import Client, create_client

from ..core.exceptions import BackendError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadedFile:
    filename: str
    content_type: str
    content: bytes


class ProfilePictureStorage(Protocol):
    def upload(self, path: str, content: bytes, content_type: str) -> str:
        """Store the image and return its public URL."""
        raise NotImplementedError


class SupabaseProfilePictureStorage(ProfilePictureStorage):
    """Profile pictures in a public Supabase Storage bucket.

    Note: The client is created lazily so the app boots without storage credentials.
    """

    def __init__(self, url: str, key: str, bucket: str):
        self._url = url
        self._key = key
        self._bucket = bucket
        self._client: Optional[Client] = None

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = create_client(self._url, self._key)
        return self._client

    def upload(self, path: str, content: bytes, content_type: str) -> str:
        bucket = self.client.storage.from_(self._bucket)
        try:
            bucket.upload(path=path, file=content, file_options={"content-type": content_type, "upsert": "true"})
            url = bucket.get_public_url(path)
        except Exception as e:
            logger.exception("profile picture upload to %s failed", self._bucket)
            raise BackendError("No se pudo subir la imagen.") from e
        logger.info("uploaded profile picture %s/%s", self._bucket, path)
        return url
