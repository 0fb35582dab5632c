"""Конфигурация приложения."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from booking_admin.constants import DEFAULT_API_TIMEOUT

load_dotenv()


@dataclass
class PageConfig:
    """Конфигурация страницы Streamlit."""

    title: str
    icon: str
    layout: str = "wide"
    initial_sidebar_state: str = "expanded"


@dataclass
class AppConfig:
    """Основная конфигурация приложения."""

    # API настройки
    api_url: str = os.getenv("API_BASE_URL", "http://localhost:3005/api")
    api_timeout: int = int(os.getenv("API_TIMEOUT", str(DEFAULT_API_TIMEOUT)))

    # Общий файл сессии (токен + пользователь) для однопользовательского
    # развёртывания; пусто - сессия хранится только в сессии браузера
    session_file: str = os.getenv("SESSION_FILE", "")

    # Логирование
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    json_logs: bool = os.getenv("JSON_LOGS", "false").lower() in ("1", "true", "yes")
    log_file: str = os.getenv("LOG_FILE", "")


# Конфигурации страниц
PAGE_CONFIGS = {
    "main": PageConfig(
        title="Booking Admin",
        icon="📋",
        layout="wide",
        initial_sidebar_state="expanded"
    ),
    "login": PageConfig(
        title="Login - Booking Admin",
        icon="🔐",
        layout="centered",
        initial_sidebar_state="collapsed"
    ),
    "dashboard": PageConfig(
        title="Dashboard - Booking Admin",
        icon="📊",
        layout="wide",
        initial_sidebar_state="expanded"
    ),
}


# Глобальная конфигурация
app_config = AppConfig()
