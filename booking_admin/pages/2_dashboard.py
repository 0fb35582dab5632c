"""Обзорная страница админ-панели."""

import logging

import streamlit as st

from booking_admin.config import PAGE_CONFIGS
from booking_admin.constants import MSG_STATS_LOAD_ERROR
from booking_admin.core.auth import (
    get_admin_api,
    get_session_store,
    init_session_state,
    logout,
    redirect_to_login,
    require_authentication,
)
from booking_admin.exceptions import APIClientError, AuthExpired
from booking_admin.utils import format_currency

logger = logging.getLogger(__name__)

# Конфигурация страницы
page_config = PAGE_CONFIGS["dashboard"]
st.set_page_config(
    page_title=page_config.title,
    page_icon=page_config.icon,
    layout=page_config.layout,
    initial_sidebar_state=page_config.initial_sidebar_state,
)

init_session_state()

# Останавливает выполнение или уводит на вход, если сессии нет
require_authentication()

admin_api = get_admin_api()
user = get_session_store().user or {}

# ===== SIDEBAR =====
with st.sidebar:
    st.markdown(f"**{user.get('name') or user.get('user_id')}**")
    st.caption(user.get("user_type", ""))
    if st.button("Log out", width="stretch"):
        logout()
        redirect_to_login()

st.title("Dashboard Overview")

try:
    response = admin_api.get_dashboard_stats()
except AuthExpired:
    redirect_to_login()
except APIClientError as e:
    logger.error(f"Dashboard stats failed: {e.to_dict()}")
    st.error(f"{MSG_STATS_LOAD_ERROR}: {e.message}")
    st.stop()

stats = (response.get("data") or {}).get("stats") or {}

col1, col2, col3, col4 = st.columns(4)
col1.metric("Total Users", stats.get("totalUsers", 0))
col2.metric("Active Vendors", stats.get("activeVendors", 0))
col3.metric("Total Bookings", stats.get("totalBookings", 0))
col4.metric("Monthly Revenue", format_currency(stats.get("monthlyRevenue")))
