"""Страница входа администратора."""

import logging

import streamlit as st

from booking_admin.config import PAGE_CONFIGS
from booking_admin.constants import MSG_EMPTY_FIELDS, MSG_LOGIN_SUCCESS, PAGE_DASHBOARD
from booking_admin.core.auth import check_authentication, get_session_store, init_session_state
from booking_admin.exceptions import APIClientError
from booking_admin.styles import SIDEBAR_HIDE_STYLE

logger = logging.getLogger(__name__)

# Настройка страницы
page_config = PAGE_CONFIGS["login"]
st.set_page_config(
    page_title=page_config.title,
    page_icon=page_config.icon,
    layout=page_config.layout,
    initial_sidebar_state=page_config.initial_sidebar_state,
)

init_session_state()
store = get_session_store()

# Скрываем sidebar для неавторизованных пользователей
st.markdown(SIDEBAR_HIDE_STYLE, unsafe_allow_html=True)

if check_authentication():
    st.switch_page(PAGE_DASHBOARD)

st.markdown("### Booking Admin")
st.markdown("#### Sign in")

with st.form(key="login_form"):
    phone_number = st.text_input("Phone number:", placeholder="+91 98765 43210")
    password = st.text_input("Password:", type="password", placeholder="Enter password")
    submit_login = st.form_submit_button("Sign in", width="stretch")

if submit_login:
    if not phone_number or not password:
        st.error(MSG_EMPTY_FIELDS)
    else:
        try:
            with st.spinner("Signing in..."):
                store.login(phone_number.strip(), password)
        except APIClientError as e:
            logger.warning(f"Login failed: {e.error_code} {e.message}")
            st.error(f"❌ {e.message}")
        else:
            user = store.user or {}
            st.success(MSG_LOGIN_SUCCESS.format(name=user.get("name") or user.get("user_id")))
            st.switch_page(PAGE_DASHBOARD)
