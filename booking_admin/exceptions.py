"""
Исключения клиента API
"""

from typing import Any, Dict, Optional

from booking_admin.constants import HTTP_UNAUTHORIZED, MSG_NETWORK_ERROR, MSG_SESSION_EXPIRED


class APIClientError(Exception):
    """Базовое исключение клиента с поддержкой HTTP статус кодов"""

    status_code: Optional[int] = None
    error_code: str = "CLIENT_ERROR"

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None,
    ):
        self.message = message
        self.details = details or {}
        if status_code:
            self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация исключения в словарь (для логов и UI)"""
        return {
            "error": self.error_code,
            "message": self.message,
            "status_code": self.status_code,
            "details": self.details,
        }


class NetworkError(APIClientError):
    """Ответ не получен: DNS, соединение, таймаут"""

    error_code = "NETWORK_ERROR"

    def __init__(self, message: str = MSG_NETWORK_ERROR, details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, details=details)


class MalformedResponse(APIClientError):
    """Ответ получен, но тело не JSON или не соответствует схеме"""

    error_code = "MALFORMED_RESPONSE"


class ApiError(APIClientError):
    """Сервер вернул статус вне диапазона 2xx"""

    error_code = "API_ERROR"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        payload: Any = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, details=details, status_code=status_code)
        self.payload = payload


class AuthExpired(ApiError):
    """401: токен истёк или невалиден, сессия сброшена"""

    status_code = HTTP_UNAUTHORIZED
    error_code = "AUTH_EXPIRED"

    def __init__(self, message: str = MSG_SESSION_EXPIRED, payload: Any = None):
        super().__init__(message=message, status_code=HTTP_UNAUTHORIZED, payload=payload)


class AuthenticationFailed(APIClientError):
    """Сервер ответил на логин конвертом success=false"""

    error_code = "AUTHENTICATION_FAILED"


class CorruptSessionError(Exception):
    """Сохранённая сессия не читается"""
