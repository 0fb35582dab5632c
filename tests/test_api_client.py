"""
Тесты APIClient: заголовки, URL, обработка статусов и ошибок
"""

from unittest.mock import MagicMock

import pytest
import requests

from booking_admin.api_client import APIClient
from booking_admin.constants import STORAGE_TOKEN_KEY, STORAGE_USER_KEY
from booking_admin.exceptions import ApiError, AuthExpired, MalformedResponse, NetworkError
from conftest import BASE_URL, make_response, sent_request


# ==================== URL & Headers ====================

def test_get_builds_url_with_query_params(client, http_session):
    client.get("/admin/users", {"page": "1", "limit": "10"})

    sent = sent_request(http_session)
    assert sent["method"] == "GET"
    assert sent["url"] == "https://api.example.test/admin/users?page=1&limit=10"
    assert sent["json"] is None
    assert sent["files"] is None
    assert sent["data"] is None


def test_get_without_params_has_no_query_string(client, http_session):
    client.get("/admin/categories")

    assert sent_request(http_session)["url"] == f"{BASE_URL}/admin/categories"


def test_params_appended_to_existing_query(client):
    url = client.build_url("/admin/items?type=gallery", {"page": 2})

    assert url == f"{BASE_URL}/admin/items?type=gallery&page=2"


def test_trailing_slash_in_base_url_is_stripped(http_session):
    client = APIClient(base_url=f"{BASE_URL}/", session=http_session)

    assert client.build_url("/auth/login") == f"{BASE_URL}/auth/login"


def test_bearer_header_sent_when_token_set(client, http_session):
    client.set_auth_token("abc.def.ghi")
    client.get("/admin/users")
    client.post("/admin/categories", {"name": "Hair"})

    for call in http_session.request.call_args_list:
        assert call.kwargs["headers"]["Authorization"] == "Bearer abc.def.ghi"


def test_no_bearer_header_after_remove(client, http_session):
    client.set_auth_token("abc.def.ghi")
    client.remove_auth_token()
    client.get("/admin/users")

    assert "Authorization" not in sent_request(http_session)["headers"]


def test_json_content_type_and_custom_headers_merged(client, http_session):
    client.request("/admin/users", headers={"X-Request-Id": "42"})

    headers = sent_request(http_session)["headers"]
    assert headers["Content-Type"] == "application/json"
    assert headers["X-Request-Id"] == "42"


def test_upload_omits_json_content_type(client, http_session):
    client.set_auth_token("tok")
    files = [("image", ("logo.png", b"\x89PNG", "image/png"))]

    client.upload("/admin/vendors/3/shop/profile-image", files, data={"type": "profile"}, method="PUT")

    sent = sent_request(http_session)
    assert sent["method"] == "PUT"
    assert "Content-Type" not in sent["headers"]
    assert sent["headers"]["Authorization"] == "Bearer tok"
    assert sent["files"] == files
    assert sent["data"] == {"type": "profile"}
    assert sent["json"] is None


def test_headers_fixed_at_request_time(client, http_session):
    client.set_auth_token("first")
    client.get("/admin/users")
    headers = sent_request(http_session)["headers"]

    client.set_auth_token("second")

    assert headers["Authorization"] == "Bearer first"


@pytest.mark.parametrize("method_name, http_method", [
    ("post", "POST"),
    ("put", "PUT"),
    ("patch", "PATCH"),
])
def test_body_methods_send_json(client, http_session, method_name, http_method):
    getattr(client, method_name)("/admin/services/5", {"price": 499})

    sent = sent_request(http_session)
    assert sent["method"] == http_method
    assert sent["json"] == {"price": 499}


def test_delete_sends_no_body(client, http_session):
    client.delete("/admin/services/5")

    sent = sent_request(http_session)
    assert sent["method"] == "DELETE"
    assert sent["json"] is None


def test_timeout_passed_to_transport(client, http_session):
    client.get("/admin/users")

    assert sent_request(http_session)["timeout"] == 5


# ==================== Responses ====================

def test_success_returns_envelope_unchanged(client, http_session):
    body = {"success": True, "data": {"x": 1}}
    http_session.request.return_value = make_response(200, body)

    assert client.get("/admin/users") == body


def test_no_content_returns_success_without_parsing(client, http_session):
    response = make_response(204)
    response.json = MagicMock(side_effect=AssertionError("must not parse"))
    http_session.request.return_value = response

    assert client.delete("/admin/users/1") == {"success": True}
    response.json.assert_not_called()


def test_not_found_raises_api_error_with_server_message(client, http_session):
    http_session.request.return_value = make_response(404, {"message": "not found"})

    with pytest.raises(ApiError) as exc_info:
        client.get("/admin/users/999")

    assert exc_info.value.message == "not found"
    assert exc_info.value.status_code == 404
    assert exc_info.value.payload == {"message": "not found"}


def test_error_without_message_uses_generic_text(client, http_session):
    http_session.request.return_value = make_response(500, {"success": False})

    with pytest.raises(ApiError, match="HTTP error 500"):
        client.get("/admin/dashboard/stats")


def test_invalid_json_raises_malformed_response(client, http_session):
    http_session.request.return_value = make_response(200, raw=b"<html>oops</html>")

    with pytest.raises(MalformedResponse) as exc_info:
        client.get("/admin/users")

    assert not isinstance(exc_info.value, ApiError)
    assert exc_info.value.status_code == 200


def test_transport_failure_raises_network_error(client, http_session):
    http_session.request.side_effect = requests.exceptions.ConnectionError("dns failure")

    with pytest.raises(NetworkError) as exc_info:
        client.get("/admin/users")

    assert not isinstance(exc_info.value, ApiError)
    assert "check your connection" in exc_info.value.message


# ==================== 401 ====================

def test_unauthorized_clears_token_and_storage(client, http_session, storage):
    storage.set_item(STORAGE_TOKEN_KEY, "tok")
    storage.set_item(STORAGE_USER_KEY, '{"user_id": 1}')
    client.set_auth_token("tok")
    http_session.request.return_value = make_response(401, {"message": "jwt expired"})

    with pytest.raises(AuthExpired) as exc_info:
        client.get("/admin/users")

    assert exc_info.value.status_code == 401
    assert client.token is None
    assert STORAGE_TOKEN_KEY not in storage
    assert STORAGE_USER_KEY not in storage


def test_unauthorized_emits_session_invalidated_before_raising(client, http_session):
    events = []
    client.add_session_invalidated_listener(lambda: events.append(client.token))
    http_session.request.return_value = make_response(401, raw=b"not json")

    with pytest.raises(AuthExpired):
        client.get("/admin/users")

    assert events == [None]


def test_unauthorized_is_api_error_subclass(client, http_session):
    http_session.request.return_value = make_response(401)

    with pytest.raises(ApiError):
        client.get("/admin/users")


def test_removed_listener_not_called(client, http_session):
    listener = MagicMock()
    client.add_session_invalidated_listener(listener)
    client.remove_session_invalidated_listener(listener)
    http_session.request.return_value = make_response(401)

    with pytest.raises(AuthExpired):
        client.get("/admin/users")

    listener.assert_not_called()


def test_remove_auth_token_is_idempotent(client, storage):
    client.remove_auth_token()
    client.remove_auth_token()

    assert client.token is None
    assert not client.has_token


# ==================== Auth endpoints ====================

def test_login_posts_credentials_without_setting_token(client, http_session):
    body = {"success": True, "data": {"user_id": 1, "token": "new-token"}}
    http_session.request.return_value = make_response(200, body)

    response = client.login("9000000001", "secret")

    sent = sent_request(http_session)
    assert sent["url"] == f"{BASE_URL}/auth/login"
    assert sent["json"] == {"phone_number": "9000000001", "password": "secret"}
    assert response == body
    # Токен устанавливает SessionStore после проверки ответа
    assert client.token is None


def test_login_without_token_leaves_client_unauthenticated(client, http_session):
    http_session.request.return_value = make_response(200, {"success": False, "message": "Invalid"})

    response = client.login("9000000001", "wrong")

    assert response["success"] is False
    assert client.token is None
