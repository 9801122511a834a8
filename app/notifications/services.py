"""
Notification service layer.

Push delivery itself runs outside this API (an external push gateway reads
User.expo_push_token). This module only manages the token slot.

Services:
    DeviceTokenService: Register/unregister the user's push token

Usage:
    from notifications.services import DeviceTokenService

    result = DeviceTokenService.register(user, "ExponentPushToken[xxxx]")
    DeviceTokenService.unregister(user)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.services import BaseService, ServiceResult

if TYPE_CHECKING:
    from authentication.models import User


class DeviceTokenService(BaseService):
    """
    Single push-token slot per user.

    Registering overwrites whatever token was there; a user receives push
    on the most recently registered device only.
    """

    @classmethod
    def register(cls, user: User, token: str | None) -> ServiceResult[User]:
        validation = cls.validate_required(expoPushToken=token)
        if validation is not None:
            return validation

        token = token.strip()
        user.expo_push_token = token
        user.save(update_fields=["expo_push_token", "updated_at"])

        cls.get_logger().info(f"Push token registered for user {user.pk}: {token[:30]}...")
        return ServiceResult.success(user)

    @classmethod
    def unregister(cls, user: User) -> ServiceResult[User]:
        user.expo_push_token = ""
        user.save(update_fields=["expo_push_token", "updated_at"])

        cls.get_logger().info(f"Push token cleared for user {user.pk}")
        return ServiceResult.success(user)
