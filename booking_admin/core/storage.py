"""Долговременное хранилище сессии (токен + пользователь)."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Tuple

from booking_admin.constants import STORAGE_TOKEN_KEY, STORAGE_USER_KEY
from booking_admin.exceptions import CorruptSessionError

logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    """Строковое key/value хранилище в духе localStorage."""

    def get_item(self, key: str) -> Optional[str]:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...


class MemoryStorage:
    """Хранилище в памяти процесса (тесты, временные сессии)."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._items


class FileStorage:
    """
    Хранилище в JSON файле на диске.

    Переживает перезагрузку страницы и перезапуск Streamlit. Файл
    перезаписывается целиком через временный файл и os.replace.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _read(self) -> Dict[str, str]:
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                items = json.load(fh)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning(f"[STORAGE] Unreadable storage file {self.path}: {e}")
            return {}
        if not isinstance(items, dict):
            logger.warning(f"[STORAGE] Unexpected storage file content in {self.path}")
            return {}
        return items

    def _write(self, items: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".session-")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(items, fh, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise

    def get_item(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        items = self._read()
        items[key] = value
        self._write(items)

    def remove_item(self, key: str) -> None:
        items = self._read()
        if key in items:
            del items[key]
            self._write(items)


def create_storage(session_file: Optional[str] = None) -> KeyValueStorage:
    """
    Хранилище для новой сессии браузера.

    По умолчанию у каждой сессии своё хранилище в памяти. Общий файл
    используется, только если он явно задан (SESSION_FILE): тогда все
    браузеры разделяют одну сессию администратора.
    """
    if session_file:
        logger.info(f"[STORAGE] Using shared session file {session_file}")
        return FileStorage(session_file)
    return MemoryStorage()


def save_session(storage: KeyValueStorage, token: str, user: Dict[str, Any]) -> None:
    """
    Сохранить токен и пользователя. Ключи пишутся только вместе.

    Args:
        storage: Хранилище
        token: Bearer токен
        user: Запись пользователя (сериализуется в JSON)
    """
    storage.set_item(STORAGE_USER_KEY, json.dumps(user, ensure_ascii=False))
    storage.set_item(STORAGE_TOKEN_KEY, token)
    logger.info(f"[SAVE_SESSION] Session saved, token length: {len(token)}")


def load_session(storage: KeyValueStorage) -> Optional[Tuple[str, Dict[str, Any]]]:
    """
    Прочитать сохранённую сессию.

    Returns:
        (token, user) или None, если хотя бы одного ключа нет

    Raises:
        CorruptSessionError: Если запись пользователя не является JSON объектом
    """
    token = storage.get_item(STORAGE_TOKEN_KEY)
    raw_user = storage.get_item(STORAGE_USER_KEY)

    if not token or not raw_user:
        if token or raw_user:
            logger.warning("[LOAD_SESSION] Only one of the session keys is present, ignoring")
        return None

    try:
        user = json.loads(raw_user)
    except ValueError as e:
        raise CorruptSessionError(f"Stored user record is not valid JSON: {e}") from e

    if not isinstance(user, dict):
        raise CorruptSessionError("Stored user record is not a JSON object")

    return token, user


def clear_session(storage: KeyValueStorage) -> None:
    """Удалить оба ключа сессии. Идемпотентно."""
    storage.remove_item(STORAGE_TOKEN_KEY)
    storage.remove_item(STORAGE_USER_KEY)
    logger.info("[CLEAR_SESSION] Session keys removed")
