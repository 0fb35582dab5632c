"""
Pydantic схемы ответов backend
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Envelope(BaseModel):
    """Единый конверт ответа API: {success, message, data}"""

    model_config = ConfigDict(extra="allow")

    success: bool = Field(description="Признак успешного выполнения")
    message: Optional[str] = Field(default=None, description="Сообщение сервера")
    data: Any = Field(default=None, description="Полезная нагрузка")


class LoginData(BaseModel):
    """
    Содержимое поля data ответа /auth/login.

    Attributes:
        user_id: Идентификатор пользователя
        user_type: Тип пользователя (admin, vendor, customer)
        profile: Поля профиля, разворачиваются в запись пользователя
        token: Bearer токен
    """

    model_config = ConfigDict(extra="ignore")

    user_id: Any
    user_type: str
    profile: Dict[str, Any] = Field(default_factory=dict)
    token: str = Field(min_length=1)

    def to_user(self) -> Dict[str, Any]:
        """Собрать запись пользователя {user_id, user_type, **profile}"""
        return {
            "user_id": self.user_id,
            "user_type": self.user_type,
            **self.profile,
        }
