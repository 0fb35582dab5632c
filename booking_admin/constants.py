"""Константы приложения."""

from typing import Final

# ===== HTTP STATUS CODES =====
HTTP_NO_CONTENT: Final[int] = 204
HTTP_UNAUTHORIZED: Final[int] = 401

# ===== HTTP HEADERS =====
HEADER_CONTENT_TYPE: Final[str] = "Content-Type"
HEADER_AUTHORIZATION: Final[str] = "Authorization"
CONTENT_TYPE_JSON: Final[str] = "application/json"

# ===== SESSION STATE KEYS (st.session_state) =====
SESSION_API_CLIENT: Final[str] = "api_client"
SESSION_STORE: Final[str] = "session_store"
SESSION_INVALIDATED: Final[str] = "session_invalidated"

# ===== PERSISTED STORAGE KEYS =====
STORAGE_TOKEN_KEY: Final[str] = "admin_token"
STORAGE_USER_KEY: Final[str] = "admin_user"

# ===== TIMEOUTS =====
DEFAULT_API_TIMEOUT: Final[int] = 30

# ===== UPLOAD FIELDS =====
UPLOAD_FIELD_IMAGE: Final[str] = "image"
UPLOAD_FIELD_IMAGES: Final[str] = "images"
UPLOAD_FIELD_DOCUMENT: Final[str] = "document"
IMAGE_TYPE_PROFILE: Final[str] = "profile"

# ===== VERIFICATION STATUS =====
VERIFICATION_PENDING: Final[str] = "pending"
VERIFICATION_APPROVED: Final[str] = "approved"
VERIFICATION_REJECTED: Final[str] = "rejected"

# ===== ERROR MESSAGES =====
MSG_NETWORK_ERROR: Final[str] = "Network error. Please check your connection."
MSG_SESSION_EXPIRED: Final[str] = "Session expired. Please login again."
MSG_INVALID_JSON: Final[str] = "Invalid JSON returned from server"
MSG_HTTP_ERROR: Final[str] = "HTTP error {status}"
MSG_LOGIN_FAILED: Final[str] = "Login failed"

# ===== UI MESSAGES =====
MSG_LOGIN_SUCCESS: Final[str] = "✅ Welcome back, {name}!"
MSG_EMPTY_FIELDS: Final[str] = "❌ Please fill in all fields"
MSG_AUTH_REQUIRED: Final[str] = "⚠️ Please log in"
MSG_STATS_LOAD_ERROR: Final[str] = "Failed to load dashboard statistics"

# ===== PAGES =====
PAGE_LOGIN: Final[str] = "pages/1_login.py"
PAGE_DASHBOARD: Final[str] = "pages/2_dashboard.py"

# ===== API ENDPOINTS =====
ENDPOINT_AUTH_LOGIN: Final[str] = "/auth/login"
ENDPOINT_AUTH_REGISTER: Final[str] = "/auth/register"
ENDPOINT_AUTH_PROFILE: Final[str] = "/auth/profile"
ENDPOINT_DASHBOARD_STATS: Final[str] = "/admin/dashboard/stats"
ENDPOINT_USERS: Final[str] = "/admin/users"
ENDPOINT_VENDORS: Final[str] = "/admin/vendors"
ENDPOINT_DOCUMENTS: Final[str] = "/admin/documents"
ENDPOINT_SHOPS: Final[str] = "/admin/shops"
ENDPOINT_SERVICES: Final[str] = "/admin/services"
ENDPOINT_CATEGORIES: Final[str] = "/admin/categories"
ENDPOINT_BOOKINGS: Final[str] = "/admin/bookings"
ENDPOINT_NOTIFICATIONS: Final[str] = "/admin/notifications"
