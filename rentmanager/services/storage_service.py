"""
Supabase Storage Service
Stores user uploads in a Supabase storage bucket.

Files live under `user_{user_id}/` so they can be listed per user.
"""
import logging
import os
import time
from datetime import datetime, timezone
from typing import List, Optional

from supabase import Client, create_client

from rentmanager.core.config import settings
from rentmanager.schemas.file_upload import FileInfo, UploadResponse
from rentmanager.services.telegram_backup import (
    BackupError,
    TelegramBackupService,
    get_backup_service,
    user_id_from_path,
)

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {
    ".pdf", ".doc", ".docx", ".jpg", ".jpeg", ".png", ".gif", ".txt", ".zip", ".rar",
}


class StorageError(Exception):
    """Raised when the storage backend rejects an operation"""


def validate_file_type(filename: str) -> None:
    ext = os.path.splitext(filename or "")[1].lower()
    if ext not in ALLOWED_EXTENSIONS:
        raise ValueError(f"tipo de archivo no permitido: {ext}")


def build_object_path(user_id: str, filename: str, now: Optional[float] = None) -> str:
    timestamp = int(now if now is not None else time.time())
    return f"user_{user_id}/{user_id}_{timestamp}_{os.path.basename(filename)}"


class StorageService:
    """Thin wrapper around the Supabase storage API for a single bucket"""

    def __init__(self, client: Optional[Client] = None, bucket: Optional[str] = None,
                 backup: Optional[TelegramBackupService] = None):
        self.bucket = bucket or settings.SUPABASE_STORAGE_BUCKET
        self.backup = backup
        try:
            self.client: Client = client or create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)
            logger.info(f"[UPLOAD] Supabase storage client initialized (bucket={self.bucket})")
        except Exception as e:
            logger.error(f"[UPLOAD] Failed to initialize Supabase client: {e}")
            raise
        self._bucket_ready = False

    def _files(self):
        return self.client.storage.from_(self.bucket)

    def ensure_bucket(self) -> None:
        """Create the bucket on first use when it does not exist yet"""
        if self._bucket_ready:
            return
        buckets = self.client.storage.list_buckets()
        names = {getattr(b, "name", None) or getattr(b, "id", None) for b in buckets}
        if self.bucket not in names:
            logger.info(f"[UPLOAD] Creating storage bucket '{self.bucket}'")
            self.client.storage.create_bucket(self.bucket, options={"public": False})
        self._bucket_ready = True

    def upload(self, content: bytes, filename: str, content_type: str, user_id: str, uploaded_by: str) -> UploadResponse:
        self.ensure_bucket()
        path = build_object_path(user_id, filename)
        try:
            self._files().upload(
                path,
                content,
                file_options={"content-type": content_type or "application/octet-stream"},
            )
        except Exception as e:
            logger.error(f"[UPLOAD] Upload of {path} failed: {e}")
            raise StorageError(str(e)) from e

        logger.info(f"[UPLOAD] Stored {filename} ({len(content)} bytes) at {path}")
        return UploadResponse(
            key=os.path.basename(path),
            link=self.get_public_url(path),
            name=filename,
            path=path,
            size=len(content),
            uploaded_by=uploaded_by,
            uploaded_at=datetime.now(timezone.utc).isoformat(),
            bucket_name=self.bucket,
        )

    def download(self, path: str) -> bytes:
        try:
            return self._files().download(path)
        except Exception as e:
            logger.error(f"[UPLOAD] Download of {path} failed: {e}")
            raise StorageError(str(e)) from e

    def remove(self, path: str) -> None:
        try:
            self._files().remove([path])
        except Exception as e:
            logger.error(f"[UPLOAD] Delete of {path} failed: {e}")
            raise StorageError(str(e)) from e
        logger.info(f"[UPLOAD] Deleted {path}")

    def download_and_remove(self, path: str) -> bytes:
        """Download a file and delete it, sending a backup copy first when one is configured."""
        data = self.download(path)
        if self.backup is not None:
            self._backup_before_delete(path, data)
        else:
            logger.info(f"[UPLOAD] Backup disabled, deleting {path} without a copy")
        self.remove(path)
        return data

    def _backup_before_delete(self, path: str, data: bytes) -> None:
        file_name = os.path.basename(path)
        user_id = user_id_from_path(path)
        try:
            backup = self.backup.backup_file(data, file_name, path, user_id)
        except BackupError as e:
            # the delete still goes ahead
            logger.error(f"[UPLOAD] Backup of {path} failed: {e}")
            self.backup.notify_backup_failed(file_name, user_id, str(e))
            return
        self.backup.notify_backup_done(file_name, user_id, backup["file_size"])

    def get_public_url(self, path: str) -> str:
        return self._files().get_public_url(path)

    def _list_folder(self, folder: str) -> List[FileInfo]:
        files = []
        for entry in self._files().list(folder):
            # folders come back without an id
            if not entry.get("id"):
                continue
            metadata = entry.get("metadata") or {}
            path = f"{folder}/{entry['name']}" if folder else entry["name"]
            files.append(FileInfo(
                name=entry["name"],
                size=metadata.get("size", 0) or 0,
                path=path,
                mime_type=metadata.get("mimetype", ""),
                uploaded_at=entry.get("created_at"),
                download_url=self.get_public_url(path),
            ))
        return files

    def list_user(self, user_id: str) -> List[FileInfo]:
        try:
            return self._list_folder(f"user_{user_id}")
        except Exception as e:
            logger.error(f"[UPLOAD] Listing files for user {user_id} failed: {e}")
            raise StorageError(str(e)) from e

    def list_all(self) -> List[FileInfo]:
        try:
            files = []
            for entry in self._files().list(""):
                name = entry.get("name", "")
                if not entry.get("id") and name.startswith("user_"):
                    files.extend(self._list_folder(name))
            logger.info(f"[UPLOAD] Listed {len(files)} stored files")
            return files
        except Exception as e:
            logger.error(f"[UPLOAD] Listing files failed: {e}")
            raise StorageError(str(e)) from e


_storage_service: Optional[StorageService] = None


def get_storage_service() -> Optional[StorageService]:
    """
    FastAPI dependency returning the shared storage service.

    Returns None when Supabase is not configured so routes can answer 503.
    """
    global _storage_service
    if _storage_service is None and settings.storage_configured:
        _storage_service = StorageService(backup=get_backup_service())
    return _storage_service
