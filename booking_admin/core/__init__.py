"""Модуль core: хранилище и сессия администратора."""

from booking_admin.core.session import SessionStore, decode_token_expiry
from booking_admin.core.storage import (
    FileStorage,
    KeyValueStorage,
    MemoryStorage,
    clear_session,
    create_storage,
    load_session,
    save_session,
)

__all__ = [
    # session
    "SessionStore",
    "decode_token_expiry",
    # storage
    "FileStorage",
    "KeyValueStorage",
    "MemoryStorage",
    "clear_session",
    "create_storage",
    "load_session",
    "save_session",
]
