"""
Blob stores for original resume files.

Two backends:
- LocalBlobStore: files under a directory on local disk
- SupabaseBlobStore: Supabase Storage REST API

Both keep the content type and caller metadata next to the object, and
raise PersistenceError on failure.
"""
import base64
import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path, PurePosixPath
from typing import Dict, Optional

import requests

from core.config_loader import StorageConfig
from core.errors import PersistenceError

logger = logging.getLogger(__name__)

METADATA_SUFFIX = '.metadata.json'


def resume_blob_path(user_id: str, resume_id: str, file_name: str) -> str:
    """Blob path for an uploaded resume: ``resumes/{user_id}/{resume_id}/{file_name}``.

    Only the basename of ``file_name`` is used.
    """
    safe_name = PurePosixPath(file_name.replace('\\', '/')).name or 'resume'
    return f"resumes/{user_id}/{resume_id}/{safe_name}"


class BlobStore(ABC):
    """Abstract file store keyed by slash-separated paths."""

    @abstractmethod
    def put(
        self,
        path: str,
        content: bytes,
        content_type: str,
        metadata: Optional[Dict[str, str]] = None,
    ) -> str:
        """Store ``content`` at ``path`` and return a URL for it.

        ``metadata`` is kept alongside the object as string key/value pairs.
        """
        pass

    @abstractmethod
    def delete(self, path: str) -> None:
        """Remove the object at ``path``. Missing objects are not an error."""
        pass


class LocalBlobStore(BlobStore):
    """Files on disk. Metadata goes to a ``<name>.metadata.json`` sidecar."""

    def __init__(self, root_dir: str, base_url: Optional[str] = None):
        self.root = Path(root_dir).resolve()
        self.base_url = base_url.rstrip('/') if base_url else None

    def _resolve(self, path: str) -> Path:
        target = (self.root / path).resolve()
        if self.root not in target.parents:
            raise PersistenceError(f"Blob path escapes storage root: {path}")
        return target

    @staticmethod
    def _sidecar(target: Path) -> Path:
        return target.with_name(target.name + METADATA_SUFFIX)

    def put(self, path, content, content_type, metadata=None) -> str:
        target = self._resolve(path)
        sidecar = {'contentType': content_type, 'metadata': dict(metadata or {})}
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
            self._sidecar(target).write_text(json.dumps(sidecar), encoding='utf-8')
        except OSError as e:
            raise PersistenceError(f"Failed to write blob {path}: {e}") from e

        logger.debug(f"Stored {len(content)} bytes at {target}")
        if self.base_url:
            return f"{self.base_url}/{path}"
        return target.as_uri()

    def read_metadata(self, path: str) -> Optional[Dict]:
        """Content type and metadata recorded by ``put``, or None if there is no object."""
        try:
            return json.loads(self._sidecar(self._resolve(path)).read_text(encoding='utf-8'))
        except FileNotFoundError:
            return None

    def delete(self, path: str) -> None:
        target = self._resolve(path)
        for file_path in (target, self._sidecar(target)):
            try:
                file_path.unlink()
            except FileNotFoundError:
                continue
            except OSError as e:
                raise PersistenceError(f"Failed to delete blob {path}: {e}") from e


class SupabaseBlobStore(BlobStore):
    """Supabase Storage over its REST API, authenticated with the service role key."""

    def __init__(self, url: str, service_key: str, bucket: str, timeout: int = 30):
        self.url = url.rstrip('/')
        self.bucket = bucket
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {service_key}",
            "apikey": service_key,
        })

    def _object_url(self, path: str) -> str:
        return f"{self.url}/storage/v1/object/{self.bucket}/{path}"

    def public_url(self, path: str) -> str:
        return f"{self.url}/storage/v1/object/public/{self.bucket}/{path}"

    def put(self, path, content, content_type, metadata=None) -> str:
        headers = {
            "Content-Type": content_type,
            "x-upsert": "false",
        }
        if metadata:
            # Supabase reads user metadata from base64-encoded JSON
            encoded = base64.b64encode(json.dumps(metadata).encode('utf-8'))
            headers["x-metadata"] = encoded.decode('ascii')
        try:
            response = self.session.post(
                self._object_url(path),
                data=content,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise PersistenceError(f"Supabase upload failed for {path}: {e}") from e

        if response.status_code not in (200, 201):
            detail = response.text[:500] if response.text else "Unknown error"
            raise PersistenceError(
                f"Supabase upload failed ({response.status_code}): {detail}"
            )
        return self.public_url(path)

    def delete(self, path: str) -> None:
        try:
            response = self.session.delete(self._object_url(path), timeout=self.timeout)
        except requests.RequestException as e:
            raise PersistenceError(f"Supabase delete failed for {path}: {e}") from e

        if response.status_code not in (200, 204, 404):
            raise PersistenceError(
                f"Supabase delete failed ({response.status_code}): {response.text[:500]}"
            )


def build_blob_store(config: StorageConfig) -> BlobStore:
    if config.backend == "supabase":
        if not config.supabase_url or not config.supabase_service_key:
            raise ValueError("Supabase storage requires SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY")
        return SupabaseBlobStore(
            url=config.supabase_url,
            service_key=config.supabase_service_key,
            bucket=config.bucket,
            timeout=config.timeout_seconds,
        )
    return LocalBlobStore(os.path.expanduser(config.local_root), base_url=config.base_url)
