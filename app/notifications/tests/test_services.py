"""Tests for DeviceTokenService."""

from notifications.services import DeviceTokenService


class TestRegister:
    def test_stores_token(self, user):
        result = DeviceTokenService.register(user, " ExponentPushToken[abc] ")

        user.refresh_from_db()
        assert result.success
        assert user.expo_push_token == "ExponentPushToken[abc]"

    def test_new_token_replaces_old(self, user):
        DeviceTokenService.register(user, "ExponentPushToken[old]")
        DeviceTokenService.register(user, "ExponentPushToken[new]")

        user.refresh_from_db()
        assert user.expo_push_token == "ExponentPushToken[new]"

    def test_missing_token(self, user):
        result = DeviceTokenService.register(user, None)

        assert result.error_code == "VALIDATION_ERROR"
        assert "expoPushToken" in result.errors

    def test_blank_token(self, user):
        assert not DeviceTokenService.register(user, "   ")


def test_unregister_clears_token(user):
    DeviceTokenService.register(user, "ExponentPushToken[abc]")

    DeviceTokenService.unregister(user)

    user.refresh_from_db()
    assert user.expo_push_token == ""
