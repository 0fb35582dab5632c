"""Централизованный API клиент для взаимодействия с backend."""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence
from urllib.parse import urlencode

import requests

from booking_admin.config import app_config
from booking_admin.constants import (
    CONTENT_TYPE_JSON,
    ENDPOINT_AUTH_LOGIN,
    ENDPOINT_AUTH_PROFILE,
    ENDPOINT_AUTH_REGISTER,
    HEADER_AUTHORIZATION,
    HEADER_CONTENT_TYPE,
    HTTP_NO_CONTENT,
    HTTP_UNAUTHORIZED,
    MSG_HTTP_ERROR,
    MSG_INVALID_JSON,
)
from booking_admin.core.storage import KeyValueStorage, clear_session
from booking_admin.exceptions import ApiError, AuthExpired, MalformedResponse, NetworkError

logger = logging.getLogger(__name__)

SessionInvalidatedListener = Callable[[], None]


class APIClient:
    """
    Клиент для взаимодействия с REST backend.

    Создаётся один раз оболочкой приложения и передаётся явно всем,
    кто ходит в API. Токен хранится только в памяти клиента; при 401
    клиент сбрасывает токен, сохранённую сессию и уведомляет подписчиков
    события "session invalidated".
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        storage: Optional[KeyValueStorage] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """
        Инициализация API клиента.

        Args:
            base_url: Базовый URL API (по умолчанию из конфигурации)
            timeout: Таймаут запросов в секундах
            storage: Хранилище сессии, ключи которого очищаются при сбросе токена
            session: HTTP сессия requests (подменяется в тестах)
        """
        self.base_url = (base_url or app_config.api_url).rstrip("/")
        self.timeout = timeout if timeout is not None else app_config.api_timeout
        self.storage = storage
        self.http = session or requests.Session()
        self.token: Optional[str] = None
        self._invalidated_listeners: List[SessionInvalidatedListener] = []

    # ===== TOKEN =====

    def set_auth_token(self, token: str) -> None:
        """Установить токен авторизации"""
        self.token = token
        logger.info("Token set in APIClient")

    def remove_auth_token(self) -> None:
        """Очистить токен авторизации и сохранённую сессию"""
        self.token = None
        if self.storage is not None:
            clear_session(self.storage)
        logger.info("Token removed from APIClient")

    @property
    def has_token(self) -> bool:
        return bool(self.token)

    # ===== SESSION INVALIDATED EVENT =====

    def add_session_invalidated_listener(self, listener: SessionInvalidatedListener) -> None:
        """Подписаться на сброс сессии после ответа 401"""
        if listener not in self._invalidated_listeners:
            self._invalidated_listeners.append(listener)

    def remove_session_invalidated_listener(self, listener: SessionInvalidatedListener) -> None:
        """Отписаться от события сброса сессии"""
        if listener in self._invalidated_listeners:
            self._invalidated_listeners.remove(listener)

    def _emit_session_invalidated(self) -> None:
        for listener in list(self._invalidated_listeners):
            listener()

    # ===== REQUEST BUILDING =====

    def build_url(self, path: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """
        Собрать полный URL из базового адреса, пути и query параметров.

        Args:
            path: Путь эндпоинта, например "/admin/users"
            params: Query параметры

        Returns:
            Полный URL
        """
        url = f"{self.base_url}{path}"
        if params:
            separator = "&" if "?" in path else "?"
            url = f"{url}{separator}{urlencode(params, doseq=True)}"
        return url

    def _get_headers(
        self,
        custom_headers: Optional[Mapping[str, str]] = None,
        multipart: bool = False,
    ) -> Dict[str, str]:
        """Получить заголовки для запроса"""
        headers = {HEADER_CONTENT_TYPE: CONTENT_TYPE_JSON}
        if custom_headers:
            headers.update(custom_headers)

        # requests сам выставит multipart/form-data с boundary
        if multipart:
            headers.pop(HEADER_CONTENT_TYPE, None)

        if self.token:
            headers[HEADER_AUTHORIZATION] = f"Bearer {self.token}"
        return headers

    # ===== CORE REQUEST =====

    def request(
        self,
        path: str,
        method: str = "GET",
        params: Optional[Mapping[str, Any]] = None,
        json: Any = None,
        files: Optional[Sequence[Any]] = None,
        data: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Dict[str, Any]:
        """
        Выполнить запрос к API.

        Args:
            path: Путь эндпоинта
            method: HTTP метод
            params: Query параметры
            json: JSON тело запроса
            files: Файлы для multipart запроса (формат requests)
            data: Поля формы для multipart запроса
            headers: Дополнительные заголовки

        Returns:
            Разобранный JSON конверт ответа без изменений

        Raises:
            NetworkError: Ответ не получен
            AuthExpired: Сервер вернул 401, сессия сброшена
            MalformedResponse: Тело ответа не JSON
            ApiError: Статус ответа вне 2xx
        """
        url = self.build_url(path, params)
        multipart = files is not None
        request_headers = self._get_headers(headers, multipart=multipart)

        logger.info(f"[API] {method} {url} (auth={self.has_token})")

        try:
            response = self.http.request(
                method,
                url,
                headers=request_headers,
                json=json,
                files=files,
                data=data,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"[API] {method} {url} failed: {e}")
            raise NetworkError(details={"url": url, "reason": str(e)}) from e

        return self._handle_response(response, method, url)

    def _handle_response(self, response: requests.Response, method: str, url: str) -> Dict[str, Any]:
        """
        Обработка ответа от сервера.

        Порядок важен: 401 обрабатывается до любого разбора тела,
        204 возвращается без попытки разобрать пустое тело.
        """
        status_code = response.status_code
        logger.info(f"[API] {method} {url} -> {status_code}")

        if status_code == HTTP_UNAUTHORIZED:
            logger.error("[API] Unauthorized! Token expired or invalid")
            self.remove_auth_token()
            self._emit_session_invalidated()
            raise AuthExpired()

        if status_code == HTTP_NO_CONTENT:
            return {"success": True}

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"[API] Failed to parse JSON response: {e}")
            raise MalformedResponse(
                MSG_INVALID_JSON,
                details={"url": url, "body": response.text[:200]},
                status_code=status_code,
            ) from e

        if not 200 <= status_code < 300:
            server_message = payload.get("message") if isinstance(payload, dict) else None
            message = server_message or MSG_HTTP_ERROR.format(status=status_code)
            logger.error(f"[API] Request failed with status {status_code}: {message}")
            raise ApiError(message, status_code=status_code, payload=payload)

        return payload

    # ===== HTTP METHODS =====

    def get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return self.request(path, method="GET", params=params)

    def post(self, path: str, data: Any = None) -> Dict[str, Any]:
        return self.request(path, method="POST", json=data if data is not None else {})

    def put(self, path: str, data: Any = None) -> Dict[str, Any]:
        return self.request(path, method="PUT", json=data if data is not None else {})

    def patch(self, path: str, data: Any = None) -> Dict[str, Any]:
        return self.request(path, method="PATCH", json=data if data is not None else {})

    def delete(self, path: str) -> Dict[str, Any]:
        return self.request(path, method="DELETE")

    def upload(
        self,
        path: str,
        files: Sequence[Any],
        data: Optional[Mapping[str, Any]] = None,
        method: str = "POST",
    ) -> Dict[str, Any]:
        """
        Загрузка файлов multipart запросом.

        Args:
            path: Путь эндпоинта
            files: Список (имя_поля, (имя_файла, содержимое, content_type))
            data: Дополнительные поля формы
            method: HTTP метод (POST или PUT)
        """
        return self.request(path, method=method, files=files, data=data)

    # ===== AUTH ENDPOINTS =====

    def login(self, phone_number: str, password: str) -> Dict[str, Any]:
        """
        Вход администратора.

        Токен из ответа в клиент не устанавливается: это делает
        SessionStore после проверки всего ответа.

        Args:
            phone_number: Номер телефона
            password: Пароль

        Returns:
            Конверт ответа /auth/login
        """
        return self.post(
            ENDPOINT_AUTH_LOGIN,
            {"phone_number": phone_number, "password": password},
        )

    def register(self, user_data: Dict[str, Any]) -> Dict[str, Any]:
        """Регистрация пользователя"""
        return self.post(ENDPOINT_AUTH_REGISTER, user_data)

    def get_profile(self) -> Dict[str, Any]:
        """Профиль текущего пользователя"""
        return self.get(ENDPOINT_AUTH_PROFILE)

    def update_profile(self, profile_data: Dict[str, Any]) -> Dict[str, Any]:
        """Обновление профиля текущего пользователя"""
        return self.put(ENDPOINT_AUTH_PROFILE, profile_data)
