"""
Telegram File Backup
Sends a copy of an uploaded file to a Telegram chat before it is removed
from storage.

Disabled unless TELEGRAM_ENABLED is true and both the bot token and the chat
id are set.
"""
import logging
import os
from datetime import datetime
from typing import Any, Dict, Optional

import httpx

from rentmanager.core.config import settings

logger = logging.getLogger(__name__)

TELEGRAM_API_URL = "https://api.telegram.org"


class BackupError(Exception):
    """Raised when Telegram does not accept a backup"""


def user_id_from_path(path: str) -> str:
    """User id encoded in a `user_{id}/...` object path, or "unknown"."""
    folder = os.path.dirname(path)
    if folder.startswith("user_") and len(folder) > len("user_"):
        return folder[len("user_"):]
    return "unknown"


def _kb(size: int) -> str:
    return f"{size / 1024:.2f} KB"


class TelegramBackupService:
    """Bot API client for a single chat"""

    def __init__(self, bot_token: str, chat_id: str, client: Optional[httpx.Client] = None):
        self.chat_id = chat_id
        self.base_url = f"{TELEGRAM_API_URL}/bot{bot_token}"
        self.client = client or httpx.Client(timeout=30.0)

    def _call(self, method: str, **kwargs) -> Dict[str, Any]:
        try:
            response = self.client.post(f"{self.base_url}/{method}", **kwargs)
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPError as e:
            raise BackupError(f"Telegram {method} failed: {e}") from e
        except ValueError as e:
            raise BackupError(f"Telegram {method} returned invalid JSON: {e}") from e

        if not body.get("ok"):
            raise BackupError(f"Telegram {method} answered not ok: {body.get('description', '')}")
        return body

    def check_connection(self) -> bool:
        try:
            self._call("getMe")
        except BackupError as e:
            logger.warning(f"[BACKUP] Telegram is unreachable: {e}")
            return False
        logger.info("[BACKUP] Telegram connection established")
        return True

    def backup_file(self, data: bytes, file_name: str, original_path: str, user_id: str) -> Dict[str, Any]:
        """
        Upload the file as a document to the chat.

        Returns file_id, message_id, file_name, file_size, backup_date and
        original_path. Raises BackupError when Telegram rejects it.
        """
        logger.info(f"[BACKUP] Backing up {file_name} ({_kb(len(data))}) to Telegram")
        caption = (
            "Backup de archivo\n"
            f"Archivo: {file_name}\n"
            f"Usuario: {user_id}\n"
            f"Ruta: {original_path}\n"
            f"Fecha: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n"
            f"Tamaño: {_kb(len(data))}"
        )
        body = self._call(
            "sendDocument",
            data={"chat_id": self.chat_id, "caption": caption},
            files={"document": (file_name, data)},
        )
        result = body.get("result") or {}
        backup = {
            "file_id": (result.get("document") or {}).get("file_id", ""),
            "message_id": result.get("message_id"),
            "file_name": file_name,
            "file_size": len(data),
            "backup_date": datetime.now().astimezone().isoformat(),
            "original_path": original_path,
        }
        logger.info(f"[BACKUP] {file_name} stored in Telegram (file_id={backup['file_id']})")
        return backup

    def send_message(self, text: str) -> bool:
        try:
            self._call("sendMessage", json={"chat_id": self.chat_id, "text": text})
            return True
        except BackupError as e:
            logger.warning(f"[BACKUP] Telegram message not sent: {e}")
            return False

    def notify_backup_done(self, file_name: str, user_id: str, file_size: int) -> bool:
        return self.send_message(
            "Backup completado\n\n"
            f"Archivo: {file_name}\n"
            f"Usuario: {user_id}\n"
            f"Tamaño: {_kb(file_size)}\n\n"
            "El archivo fue respaldado antes de ser eliminado del almacenamiento."
        )

    def notify_backup_failed(self, file_name: str, user_id: str, error: str) -> bool:
        return self.send_message(
            "Error en backup\n\n"
            f"Archivo: {file_name}\n"
            f"Usuario: {user_id}\n"
            f"Error: {error}\n\n"
            "El archivo NO fue respaldado. Revisar logs."
        )


_backup_service: Optional[TelegramBackupService] = None


def get_backup_service() -> Optional[TelegramBackupService]:
    """Shared backup client, or None when the Telegram backup is switched off"""
    global _backup_service
    if not settings.TELEGRAM_ENABLED:
        return None
    if not settings.telegram_configured:
        logger.warning("[BACKUP] TELEGRAM_ENABLED is set but the bot token or chat id is missing")
        return None
    if _backup_service is None:
        _backup_service = TelegramBackupService(settings.TELEGRAM_BOT_TOKEN, settings.TELEGRAM_CHAT_ID)
    return _backup_service
