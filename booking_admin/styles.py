"""Стили для Streamlit приложения."""

from typing import Final

# ===== SIDEBAR STYLES =====
SIDEBAR_HIDE_STYLE: Final[str] = """
<style>
    [data-testid="stSidebar"] {
        display: none;
    }
    [data-testid="stSidebarNav"] {
        display: none;
    }
</style>
"""
