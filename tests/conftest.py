"""
Общие фикстуры тестов клиента API и сессии
"""

import json
import time
from typing import Any, Optional
from unittest.mock import MagicMock

import jwt
import pytest
import requests

from booking_admin.api_client import APIClient
from booking_admin.core.session import SessionStore
from booking_admin.core.storage import MemoryStorage

BASE_URL = "https://api.example.test"


def make_response(status_code: int, body: Any = None, raw: Optional[bytes] = None) -> requests.Response:
    """Собрать настоящий requests.Response с заданным статусом и телом"""
    response = requests.Response()
    response.status_code = status_code
    if raw is not None:
        response._content = raw
    elif body is not None:
        response._content = json.dumps(body).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    else:
        response._content = b""
    return response


def make_token(exp_offset: Optional[float] = 3600, **claims: Any) -> str:
    """JWT с exp = now + exp_offset (None - без exp)"""
    payload = {"sub": "1", **claims}
    if exp_offset is not None:
        payload["exp"] = int(time.time() + exp_offset)
    return jwt.encode(payload, "test-secret-key-with-at-least-32-bytes!", algorithm="HS256")


def login_envelope(token: str) -> dict:
    return {
        "success": True,
        "message": "Login successful",
        "data": {
            "user_id": 7,
            "user_type": "admin",
            "profile": {"name": "Asha", "phone_number": "9000000001"},
            "token": token,
        },
    }


@pytest.fixture
def http_session():
    """Подменённая requests.Session; по умолчанию отвечает 200 {"success": true}"""
    session = MagicMock(spec=requests.Session)
    session.request.return_value = make_response(200, {"success": True})
    return session


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def client(http_session, storage):
    return APIClient(base_url=BASE_URL, timeout=5, storage=storage, session=http_session)


@pytest.fixture
def store(client, storage):
    return SessionStore(client, storage)


def sent_request(http_session) -> dict:
    """Аргументы последнего вызова session.request"""
    args, kwargs = http_session.request.call_args
    method, url = args
    return {"method": method, "url": url, **kwargs}
