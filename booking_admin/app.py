"""Главная страница - навигация и маршрутизация."""

import streamlit as st

from booking_admin.config import PAGE_CONFIGS
from booking_admin.constants import PAGE_DASHBOARD, PAGE_LOGIN
from booking_admin.core.auth import check_authentication, get_session_store, init_session_state

# Настройка страницы
page_config = PAGE_CONFIGS["main"]
st.set_page_config(
    page_title=page_config.title,
    page_icon=page_config.icon,
    layout=page_config.layout,
    initial_sidebar_state=page_config.initial_sidebar_state,
)

# Клиент, хранилище и восстановление сессии
init_session_state()

if get_session_store().loading:
    st.stop()

if check_authentication():
    st.switch_page(PAGE_DASHBOARD)
else:
    st.switch_page(PAGE_LOGIN)
