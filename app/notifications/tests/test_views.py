"""
API tests for push token endpoints.

Endpoints:
    POST /api/v1/notifications/register-token/
    POST /api/v1/notifications/unregister-token/
"""

REGISTER_URL = "/api/v1/notifications/register-token/"
UNREGISTER_URL = "/api/v1/notifications/unregister-token/"


class TestRegisterTokenView:
    def test_register(self, client_for, user):
        response = client_for(user).post(
            REGISTER_URL, {"expoPushToken": "ExponentPushToken[abc]"}, format="json"
        )

        user.refresh_from_db()
        assert response.status_code == 200
        assert response.data == {
            "success": True,
            "message": "Device token registered successfully",
        }
        assert user.expo_push_token == "ExponentPushToken[abc]"

    def test_missing_token(self, client_for, user):
        response = client_for(user).post(REGISTER_URL, {}, format="json")

        assert response.status_code == 400
        assert response.data["error_code"] == "VALIDATION_ERROR"

    def test_requires_authentication(self, api_client, db):
        response = api_client.post(REGISTER_URL, {"expoPushToken": "x"}, format="json")

        assert response.status_code == 401


class TestUnregisterTokenView:
    def test_unregister(self, client_for, user):
        user.expo_push_token = "ExponentPushToken[abc]"
        user.save()

        response = client_for(user).post(UNREGISTER_URL)

        user.refresh_from_db()
        assert response.status_code == 200
        assert response.data["success"] is True
        assert user.expo_push_token == ""
