"""Связка SessionStore и APIClient с session state Streamlit."""

import logging

import streamlit as st

from booking_admin.admin_api import AdminAPI
from booking_admin.api_client import APIClient
from booking_admin.config import app_config
from booking_admin.constants import (
    MSG_AUTH_REQUIRED,
    PAGE_LOGIN,
    SESSION_API_CLIENT,
    SESSION_INVALIDATED,
    SESSION_STORE,
)
from booking_admin.core.session import SessionStore
from booking_admin.core.storage import create_storage
from booking_admin.logging_config import setup_logging

logger = logging.getLogger(__name__)


def _mark_session_invalidated() -> None:
    st.session_state[SESSION_INVALIDATED] = True


def init_session_state() -> None:
    """
    Создать клиент и хранилище сессии один раз на сессию браузера.

    Клиент и SessionStore живут в st.session_state и переживают
    перезапуски скрипта страницы.
    """
    if SESSION_STORE in st.session_state:
        return

    setup_logging(
        level=app_config.log_level,
        json_logs=app_config.json_logs,
        log_file=app_config.log_file or None,
    )

    storage = create_storage(app_config.session_file)
    client = APIClient(storage=storage)
    store = SessionStore(client, storage)
    client.add_session_invalidated_listener(_mark_session_invalidated)

    st.session_state[SESSION_API_CLIENT] = client
    st.session_state[SESSION_STORE] = store
    st.session_state[SESSION_INVALIDATED] = False

    store.initialize()
    logger.info(f"[INIT] Session state initialized, authenticated={store.is_authenticated}")


def get_session_store() -> SessionStore:
    """Текущий SessionStore"""
    return st.session_state[SESSION_STORE]


def get_api_client() -> APIClient:
    """Текущий API клиент (токен уже установлен SessionStore)"""
    return st.session_state[SESSION_API_CLIENT]


def get_admin_api() -> AdminAPI:
    """Обёртка эндпоинтов админки над текущим клиентом"""
    return AdminAPI(get_api_client())


def check_authentication() -> bool:
    """
    Проверка авторизации пользователя.

    Returns:
        True если сессия активна и токен не истёк
    """
    store = get_session_store()
    return store.is_authenticated and store.refresh_session()


def redirect_to_login() -> None:
    """Перейти на страницу входа, сбросив флаг инвалидированной сессии."""
    st.session_state[SESSION_INVALIDATED] = False
    st.switch_page(PAGE_LOGIN)


def require_authentication() -> None:
    """Требует авторизацию, иначе перенаправляет на страницу входа."""
    store = get_session_store()
    if store.loading:
        st.stop()

    if st.session_state.get(SESSION_INVALIDATED) or not check_authentication():
        logger.info("[AUTH] Not authenticated, redirecting to login")
        st.warning(MSG_AUTH_REQUIRED)
        redirect_to_login()


def logout() -> None:
    """Выход из системы."""
    get_session_store().logout()
    st.session_state[SESSION_INVALIDATED] = False
