"""Эндпоинты админ-панели поверх APIClient."""

import logging
from typing import Any, Dict, Iterable, Optional

from booking_admin.api_client import APIClient
from booking_admin.constants import (
    ENDPOINT_BOOKINGS,
    ENDPOINT_CATEGORIES,
    ENDPOINT_DASHBOARD_STATS,
    ENDPOINT_DOCUMENTS,
    ENDPOINT_NOTIFICATIONS,
    ENDPOINT_SERVICES,
    ENDPOINT_SHOPS,
    ENDPOINT_USERS,
    ENDPOINT_VENDORS,
    IMAGE_TYPE_PROFILE,
    UPLOAD_FIELD_DOCUMENT,
    UPLOAD_FIELD_IMAGE,
    UPLOAD_FIELD_IMAGES,
    VERIFICATION_APPROVED,
    VERIFICATION_PENDING,
    VERIFICATION_REJECTED,
)

logger = logging.getLogger(__name__)

# Файл в формате requests: file-like объект или (имя, содержимое, content_type)
FileSpec = Any
Envelope = Dict[str, Any]


def clean_filters(filters: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Убрать пустые фильтры, чтобы они не попадали в query string"""
    if not filters:
        return {}
    return {key: value for key, value in filters.items() if value not in (None, "")}


class AdminAPI:
    """
    Типизированные обёртки эндпоинтов /admin/... backend.

    Все методы возвращают конверт ответа как есть и пробрасывают
    исключения APIClient.
    """

    def __init__(self, client: APIClient) -> None:
        self.client = client

    # ===== DASHBOARD =====

    def get_dashboard_stats(self) -> Envelope:
        return self.client.get(ENDPOINT_DASHBOARD_STATS)

    # ===== USERS =====

    def get_all_users(self, filters: Optional[Dict[str, Any]] = None) -> Envelope:
        return self.client.get(ENDPOINT_USERS, clean_filters(filters))

    def get_user_by_id(self, user_id: Any) -> Envelope:
        return self.client.get(f"{ENDPOINT_USERS}/{user_id}")

    def create_admin(self, admin_data: Dict[str, Any]) -> Envelope:
        return self.client.post(f"{ENDPOINT_USERS}/admin", admin_data)

    def update_user_status(self, user_id: Any, status: str) -> Envelope:
        return self.client.put(f"{ENDPOINT_USERS}/{user_id}/status", {"status": status})

    def delete_user(self, user_id: Any) -> Envelope:
        return self.client.delete(f"{ENDPOINT_USERS}/{user_id}")

    # ===== VENDORS =====

    def get_all_vendors(self, filters: Optional[Dict[str, Any]] = None) -> Envelope:
        return self.client.get(ENDPOINT_VENDORS, clean_filters(filters))

    def get_vendor_by_id(self, vendor_id: Any) -> Envelope:
        return self.client.get(f"{ENDPOINT_VENDORS}/{vendor_id}")

    def update_vendor_verification(self, vendor_id: Any, verification_data: Dict[str, Any]) -> Envelope:
        return self.client.put(f"{ENDPOINT_VENDORS}/{vendor_id}/verification", verification_data)

    def create_vendor_with_shop(self, vendor_data: Dict[str, Any]) -> Envelope:
        return self.client.post(ENDPOINT_VENDORS, vendor_data)

    def update_vendor_shop_details(self, user_id: Any, shop_data: Dict[str, Any]) -> Envelope:
        return self.client.put(f"{ENDPOINT_VENDORS}/{user_id}/shop", shop_data)

    def get_vendor_services_for_booking(self, vendor_id: Any) -> Envelope:
        return self.client.get(f"{ENDPOINT_VENDORS}/{vendor_id}/services")

    # ===== PENDING APPROVALS =====

    def get_pending_vendors(self, filters: Optional[Dict[str, Any]] = None) -> Envelope:
        """Вендоры, ожидающие проверки"""
        params = dict(filters or {})
        params["verification_status"] = VERIFICATION_PENDING
        return self.get_all_vendors(params)

    def approve_vendor(self, vendor_id: Any, admin_comments: str = "") -> Envelope:
        return self.update_vendor_verification(
            vendor_id,
            {"verification_status": VERIFICATION_APPROVED, "admin_comments": admin_comments},
        )

    def reject_vendor(self, vendor_id: Any, admin_comments: str = "") -> Envelope:
        return self.update_vendor_verification(
            vendor_id,
            {"verification_status": VERIFICATION_REJECTED, "admin_comments": admin_comments},
        )

    # ===== VENDOR DOCUMENTS =====

    def get_vendor_documents(self, vendor_id: Any) -> Envelope:
        return self.client.get(f"{ENDPOINT_VENDORS}/{vendor_id}/documents")

    def upload_vendor_document(self, vendor_id: Any, document: FileSpec, document_type: str) -> Envelope:
        return self.client.upload(
            f"{ENDPOINT_VENDORS}/{vendor_id}/documents",
            files=[(UPLOAD_FIELD_DOCUMENT, document)],
            data={"document_type": document_type},
        )

    def update_document_verification(self, document_id: Any, verification_data: Dict[str, Any]) -> Envelope:
        return self.client.put(f"{ENDPOINT_DOCUMENTS}/{document_id}/verification", verification_data)

    def delete_vendor_document(self, document_id: Any) -> Envelope:
        return self.client.delete(f"{ENDPOINT_DOCUMENTS}/{document_id}")

    def approve_all_documents(self, vendor_id: Any, admin_comments: str = "") -> Envelope:
        return self.client.put(
            f"{ENDPOINT_VENDORS}/{vendor_id}/documents/approve-all",
            {"admin_comments": admin_comments},
        )

    # ===== SHOPS =====

    def get_all_shops(self, filters: Optional[Dict[str, Any]] = None) -> Envelope:
        return self.client.get(ENDPOINT_SHOPS, clean_filters(filters))

    def get_shop_by_id(self, shop_id: Any) -> Envelope:
        return self.client.get(f"{ENDPOINT_SHOPS}/{shop_id}")

    def create_shop(self, shop_data: Dict[str, Any]) -> Envelope:
        return self.client.post(ENDPOINT_SHOPS, shop_data)

    def update_shop(self, shop_id: Any, shop_data: Dict[str, Any]) -> Envelope:
        return self.client.put(f"{ENDPOINT_SHOPS}/{shop_id}", shop_data)

    def delete_shop(self, shop_id: Any) -> Envelope:
        return self.client.delete(f"{ENDPOINT_SHOPS}/{shop_id}")

    def update_shop_verification(self, shop_id: Any, verification_data: Dict[str, Any]) -> Envelope:
        return self.client.put(f"{ENDPOINT_SHOPS}/{shop_id}/verification", verification_data)

    # ===== SHOP IMAGES =====

    def upload_shop_profile_image(self, user_id: Any, image: FileSpec) -> Envelope:
        """Заменить фото профиля магазина (одно изображение + поле type)"""
        return self.client.upload(
            f"{ENDPOINT_VENDORS}/{user_id}/shop/profile-image",
            files=[(UPLOAD_FIELD_IMAGE, image)],
            data={"type": IMAGE_TYPE_PROFILE},
            method="PUT",
        )

    def upload_shop_gallery_images(self, user_id: Any, images: Iterable[FileSpec]) -> Envelope:
        """Добавить изображения в галерею магазина"""
        files = [(UPLOAD_FIELD_IMAGES, image) for image in images]
        if not files:
            raise ValueError("At least one image is required")
        return self.client.upload(f"{ENDPOINT_VENDORS}/{user_id}/shop/gallery-images", files=files)

    def delete_shop_image(self, user_id: Any, image_id: Any, image_type: str) -> Envelope:
        return self.client.request(
            f"{ENDPOINT_VENDORS}/{user_id}/shop/images/{image_id}",
            method="DELETE",
            params={"type": image_type},
        )

    def set_shop_primary_image(self, user_id: Any, image_id: Any) -> Envelope:
        return self.client.put(f"{ENDPOINT_VENDORS}/{user_id}/shop/images/{image_id}/primary", {})

    # ===== SERVICES =====

    def get_all_services(self, filters: Optional[Dict[str, Any]] = None) -> Envelope:
        return self.client.get(ENDPOINT_SERVICES, clean_filters(filters))

    def get_service_by_id(self, service_id: Any) -> Envelope:
        return self.client.get(f"{ENDPOINT_SERVICES}/{service_id}")

    def create_service(self, service_data: Dict[str, Any]) -> Envelope:
        return self.client.post(ENDPOINT_SERVICES, service_data)

    def update_service(self, service_id: Any, service_data: Dict[str, Any]) -> Envelope:
        return self.client.put(f"{ENDPOINT_SERVICES}/{service_id}", service_data)

    def delete_service(self, service_id: Any) -> Envelope:
        return self.client.delete(f"{ENDPOINT_SERVICES}/{service_id}")

    def toggle_service_availability(self, service_id: Any, is_available: bool) -> Envelope:
        return self.client.put(
            f"{ENDPOINT_SERVICES}/{service_id}/availability",
            {"is_available": is_available},
        )

    # ===== CATEGORIES =====

    def get_all_categories(self, filters: Optional[Dict[str, Any]] = None) -> Envelope:
        return self.client.get(ENDPOINT_CATEGORIES, clean_filters(filters))

    def get_category_by_id(self, category_id: Any) -> Envelope:
        return self.client.get(f"{ENDPOINT_CATEGORIES}/{category_id}")

    def create_category(self, category_data: Dict[str, Any]) -> Envelope:
        return self.client.post(ENDPOINT_CATEGORIES, category_data)

    def update_category(self, category_id: Any, category_data: Dict[str, Any]) -> Envelope:
        return self.client.put(f"{ENDPOINT_CATEGORIES}/{category_id}", category_data)

    def delete_category(self, category_id: Any) -> Envelope:
        return self.client.delete(f"{ENDPOINT_CATEGORIES}/{category_id}")

    # ===== BOOKINGS =====

    def get_all_bookings(self, filters: Optional[Dict[str, Any]] = None) -> Envelope:
        return self.client.get(ENDPOINT_BOOKINGS, clean_filters(filters))

    def get_booking_by_id(self, booking_id: Any) -> Envelope:
        return self.client.get(f"{ENDPOINT_BOOKINGS}/{booking_id}")

    def create_booking(self, booking_data: Dict[str, Any]) -> Envelope:
        return self.client.post(ENDPOINT_BOOKINGS, booking_data)

    def update_booking_status(self, booking_id: Any, status_data: Dict[str, Any]) -> Envelope:
        return self.client.put(f"{ENDPOINT_BOOKINGS}/{booking_id}/status", status_data)

    def cancel_booking(self, booking_id: Any, reason: str, cancelled_by: str = "admin") -> Envelope:
        """Отмена бронирования; причина обязательна"""
        if not reason or not reason.strip():
            raise ValueError("Cancellation reason is required")
        return self.client.put(
            f"{ENDPOINT_BOOKINGS}/{booking_id}/cancel",
            {"cancellation_reason": reason, "cancelled_by": cancelled_by},
        )

    # ===== NOTIFICATIONS =====

    def send_notification(self, notification: Dict[str, Any]) -> Envelope:
        logger.info(f"Sending notification to: {notification.get('target', 'all')}")
        return self.client.post(ENDPOINT_NOTIFICATIONS, notification)
