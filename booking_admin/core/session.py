"""Хранилище сессии администратора: пользователь, токен, срок действия."""

import logging
import math
import time
from typing import TYPE_CHECKING, Any, Dict, Optional

import jwt
from pydantic import ValidationError

from booking_admin.constants import MSG_LOGIN_FAILED
from booking_admin.core.storage import KeyValueStorage, clear_session, load_session, save_session
from booking_admin.exceptions import AuthenticationFailed, CorruptSessionError, MalformedResponse
from booking_admin.schemas import Envelope, LoginData

if TYPE_CHECKING:
    from booking_admin.api_client import APIClient

logger = logging.getLogger(__name__)


def decode_token_expiry(token: Optional[str]) -> Optional[float]:
    """
    Достать claim exp из JWT без проверки подписи.

    Returns:
        Unix timestamp истечения или None, если токен не декодируется
        или exp отсутствует/не число
    """
    if not token:
        return None
    try:
        payload = jwt.decode(token, options={"verify_signature": False})
    except jwt.PyJWTError as e:
        logger.debug(f"Token decode error: {e}")
        return None

    exp = payload.get("exp")
    if isinstance(exp, bool) or not isinstance(exp, (int, float)) or not math.isfinite(exp):
        return None
    return float(exp)


class SessionStore:
    """
    Единственный владелец сессии администратора.

    Хранит пользователя и токен в памяти, сохраняет их в долговременное
    хранилище и передаёт токен в APIClient. Подписывается на событие
    "session invalidated" клиента и сбрасывает состояние после 401.
    """

    def __init__(self, api_client: "APIClient", storage: KeyValueStorage) -> None:
        self.api_client = api_client
        self.storage = storage
        self._user: Optional[Dict[str, Any]] = None
        self._token: Optional[str] = None
        self._is_authenticated = False
        self._loading = True
        api_client.add_session_invalidated_listener(self._on_session_invalidated)

    # ===== STATE =====

    @property
    def user(self) -> Optional[Dict[str, Any]]:
        return self._user

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def is_authenticated(self) -> bool:
        return self._is_authenticated

    @property
    def loading(self) -> bool:
        return self._loading

    def _reset(self) -> None:
        self._user = None
        self._token = None
        self._is_authenticated = False

    # ===== OPERATIONS =====

    def initialize(self) -> None:
        """Восстановить сессию из хранилища при старте."""
        try:
            restored = load_session(self.storage)
            if restored is None:
                logger.info("[INIT] No stored session found")
                if self._token:
                    self.api_client.remove_auth_token()
                self._reset()
                return

            token, user = restored
            self._token = token
            self._user = user
            self._is_authenticated = True
            self.api_client.set_auth_token(token)
            logger.info(f"[INIT] Session restored for user: {user.get('user_id')}")
        except CorruptSessionError as e:
            logger.warning(f"[INIT] Discarding corrupted session: {e}")
            clear_session(self.storage)
            self._reset()
        finally:
            self._loading = False

    def login(self, phone_number: str, password: str) -> Dict[str, Any]:
        """
        Вход администратора.

        Args:
            phone_number: Номер телефона
            password: Пароль

        Returns:
            Конверт ответа /auth/login

        Raises:
            AuthenticationFailed: Сервер ответил success=false
            MalformedResponse: Ответ не соответствует схеме LoginData
            APIClientError: Любая ошибка клиента пробрасывается как есть
        """
        response = self.api_client.login(phone_number, password)

        try:
            envelope = Envelope.model_validate(response)
        except ValidationError as e:
            raise MalformedResponse(
                "Unexpected login response envelope",
                details={"errors": e.errors()},
            ) from e

        if not envelope.success:
            raise AuthenticationFailed(envelope.message or MSG_LOGIN_FAILED)

        try:
            login_data = LoginData.model_validate(envelope.data)
        except ValidationError as e:
            raise MalformedResponse(
                "Unexpected login response data",
                details={"errors": e.errors()},
            ) from e

        user = login_data.to_user()
        self._user = user
        self._token = login_data.token
        self._is_authenticated = True

        save_session(self.storage, login_data.token, user)
        self.api_client.set_auth_token(login_data.token)

        logger.info(f"User logged in: {user.get('user_id')} ({user.get('user_type')})")
        return response

    def logout(self) -> None:
        """Выход: очистка памяти, хранилища и токена клиента."""
        self._reset()
        clear_session(self.storage)
        self.api_client.remove_auth_token()
        logger.info("User logged out")

    def is_token_expired(self) -> bool:
        """Истёк ли токен. Никогда не бросает исключений."""
        expiry = decode_token_expiry(self._token)
        if expiry is None:
            return True
        return time.time() >= expiry

    def refresh_session(self) -> bool:
        """
        Проверка срока действия токена без обращения к серверу.

        Returns:
            True если сессия ещё действительна, иначе False (после logout)
        """
        if self.is_token_expired():
            logger.info("Token expired, logging out")
            self.logout()
            return False
        return True

    def _on_session_invalidated(self) -> None:
        logger.warning("Session invalidated by API, resetting state")
        self._reset()
