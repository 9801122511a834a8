"""
API tests for chat endpoints.

Endpoints:
    GET    /api/v1/conversations/
    POST   /api/v1/conversations/{user_id}/read/
    POST   /api/v1/messages/
    GET    /api/v1/messages/{user_id}/
    GET    /api/v1/groups/                 POST /api/v1/groups/
    PUT    /api/v1/groups/{id}/            DELETE /api/v1/groups/{id}/
    GET    /api/v1/groups/{id}/messages/   POST /api/v1/groups/{id}/messages/
    POST   /api/v1/groups/{id}/members/
    DELETE /api/v1/groups/{id}/members/{user_id}/
"""

import pytest

from chat.models import Group, Message
from chat.tests.factories import DirectMessageFactory, GroupFactory, GroupMessageFactory

CONVERSATIONS_URL = "/api/v1/conversations/"
MESSAGES_URL = "/api/v1/messages/"
GROUPS_URL = "/api/v1/groups/"


def group_url(group_id, suffix=""):
    return f"{GROUPS_URL}{group_id}/{suffix}"


@pytest.mark.parametrize(
    "method,url",
    [
        ("get", CONVERSATIONS_URL),
        ("post", MESSAGES_URL),
        ("get", f"{MESSAGES_URL}1/"),
        ("get", GROUPS_URL),
        ("post", GROUPS_URL),
    ],
)
def test_requires_authentication(api_client, db, method, url):
    response = getattr(api_client, method)(url)

    assert response.status_code == 401


class TestConversationViews:
    def test_list(self, client_for, organization, volunteer):
        DirectMessageFactory(sender=organization, receiver=volunteer, content="Welcome")

        response = client_for(volunteer).get(CONVERSATIONS_URL)

        assert response.status_code == 200
        [conversation] = response.data
        assert conversation["counterpartyId"] == organization.pk
        assert conversation["counterparty"]["name"] == "Olive Org"
        assert conversation["lastMessage"]["content"] == "Welcome"
        assert conversation["lastMessage"]["isRead"] is False
        assert conversation["unreadCount"] == 1

    def test_mark_read(self, client_for, organization, volunteer):
        DirectMessageFactory.create_batch(2, sender=organization, receiver=volunteer)

        response = client_for(volunteer).post(f"{CONVERSATIONS_URL}{organization.pk}/read/")

        assert response.status_code == 200
        assert response.data == {"success": True, "updatedCount": 2}

    def test_mark_read_unknown_user(self, client_for, volunteer):
        response = client_for(volunteer).post(f"{CONVERSATIONS_URL}999999/read/")

        assert response.status_code == 404
        assert response.data["error_code"] == "USER_NOT_FOUND"


class TestDirectMessageViews:
    def test_send_returns_created_message(self, client_for, organization, volunteer):
        response = client_for(organization).post(
            MESSAGES_URL,
            {"receiverId": volunteer.pk, "content": "See you Saturday!"},
            format="json",
        )

        assert response.status_code == 201
        assert response.data["content"] == "See you Saturday!"
        assert response.data["receiverId"] == volunteer.pk
        assert response.data["groupId"] is None
        assert response.data["sender"]["id"] == organization.pk
        assert response.data["media"] is None
        assert response.data["isRead"] is False

    def test_send_media(self, client_for, organization, volunteer):
        response = client_for(organization).post(
            MESSAGES_URL,
            {
                "receiverId": volunteer.pk,
                "media": {
                    "url": "https://cdn.example.com/uploads/photo.jpg",
                    "kind": "image",
                    "mimeType": "image/jpeg",
                },
            },
            format="json",
        )

        assert response.status_code == 201
        assert response.data["content"] == "Sent an image"
        assert response.data["media"]["mimeType"] == "image/jpeg"

    def test_send_without_receiver(self, client_for, organization):
        response = client_for(organization).post(MESSAGES_URL, {"content": "Hi"}, format="json")

        assert response.status_code == 400
        assert response.data["error_code"] == "VALIDATION_ERROR"
        assert "receiverId" in response.data["errors"]

    def test_send_without_content_or_media(self, client_for, organization, volunteer):
        response = client_for(organization).post(
            MESSAGES_URL, {"receiverId": volunteer.pk, "content": ""}, format="json"
        )

        assert response.status_code == 400
        assert response.data["error_code"] == "EMPTY_MESSAGE"

    def test_invalid_media_kind(self, client_for, organization, volunteer):
        response = client_for(organization).post(
            MESSAGES_URL,
            {
                "receiverId": volunteer.pk,
                "media": {"url": "https://cdn.example.com/a.pdf", "kind": "document"},
            },
            format="json",
        )

        assert response.status_code == 400
        assert not Message.objects.exists()

    def test_volunteer_cannot_start_thread(self, client_for, volunteer, other_volunteer):
        response = client_for(volunteer).post(
            MESSAGES_URL, {"receiverId": other_volunteer.pk, "content": "Hi"}, format="json"
        )

        assert response.status_code == 403
        assert response.data["error_code"] == "CANNOT_INITIATE_CONVERSATION"

    def test_unknown_receiver(self, client_for, organization):
        response = client_for(organization).post(
            MESSAGES_URL, {"receiverId": 999999, "content": "Hi"}, format="json"
        )

        assert response.status_code == 404

    def test_fetch_page(self, client_for, organization, volunteer):
        messages = DirectMessageFactory.create_batch(3, sender=organization, receiver=volunteer)

        response = client_for(volunteer).get(
            f"{MESSAGES_URL}{organization.pk}/", {"limit": 2}
        )

        assert response.status_code == 200
        assert [m["id"] for m in response.data["messages"]] == [messages[1].pk, messages[2].pk]
        assert response.data["nextCursor"] == messages[1].pk

        older = client_for(volunteer).get(
            f"{MESSAGES_URL}{organization.pk}/",
            {"limit": 2, "cursor": response.data["nextCursor"]},
        )
        assert [m["id"] for m in older.data["messages"]] == [messages[0].pk]
        assert older.data["nextCursor"] is None

    def test_fetch_marks_read_and_reports_readers(self, client_for, organization, volunteer):
        DirectMessageFactory(sender=organization, receiver=volunteer)

        client_for(volunteer).get(f"{MESSAGES_URL}{organization.pk}/")
        response = client_for(organization).get(f"{MESSAGES_URL}{volunteer.pk}/")

        [message] = response.data["messages"]
        assert message["isRead"] is True
        assert message["readBy"] == [volunteer.pk]

    def test_fetch_bad_cursor(self, client_for, organization, volunteer):
        response = client_for(volunteer).get(
            f"{MESSAGES_URL}{organization.pk}/", {"cursor": "abc"}
        )

        assert response.status_code == 400
        assert response.data["error_code"] == "INVALID_CURSOR"


class TestGroupViews:
    def test_create(self, client_for, organization, volunteer):
        response = client_for(organization).post(
            GROUPS_URL,
            {"name": "Tree planting", "memberIds": [volunteer.pk], "description": "Sundays"},
            format="json",
        )

        assert response.status_code == 201
        assert response.data["name"] == "Tree planting"
        assert response.data["createdBy"] == organization.pk
        assert {m["id"] for m in response.data["members"]} == {organization.pk, volunteer.pk}
        assert [a["id"] for a in response.data["admins"]] == [organization.pk]
        assert response.data["isOrganizationGroup"] is False
        assert response.data["opportunityId"] is None

    def test_create_requires_member_ids(self, client_for, organization):
        response = client_for(organization).post(GROUPS_URL, {"name": "x"}, format="json")

        assert response.status_code == 400
        assert "memberIds" in response.data

    def test_volunteer_cannot_create(self, client_for, volunteer):
        response = client_for(volunteer).post(
            GROUPS_URL, {"name": "Mine", "memberIds": []}, format="json"
        )

        assert response.status_code == 403
        assert response.data["error_code"] == "CANNOT_CREATE_GROUP"

    def test_list(self, client_for, group, organization, volunteer):
        GroupMessageFactory(group=group, sender=organization, content="Bring gloves")

        response = client_for(volunteer).get(GROUPS_URL)

        assert response.status_code == 200
        [item] = response.data
        assert item["id"] == group.pk
        assert item["lastMessage"]["content"] == "Bring gloves"
        assert item["unreadCount"] == 1

    def test_update(self, client_for, group, organization):
        response = client_for(organization).put(
            group_url(group.pk), {"name": "Renamed"}, format="json"
        )

        assert response.status_code == 200
        assert response.data["name"] == "Renamed"

    def test_update_by_member_forbidden(self, client_for, group, volunteer):
        response = client_for(volunteer).put(group_url(group.pk), {"name": "x"}, format="json")

        assert response.status_code == 403
        assert response.data["error_code"] == "NOT_GROUP_MANAGER"

    def test_delete(self, client_for, group, organization):
        response = client_for(organization).delete(group_url(group.pk))

        assert response.status_code == 200
        assert response.data == {"success": True, "message": "Group deleted successfully"}
        assert not Group.objects.filter(pk=group.pk).exists()

    def test_delete_missing(self, client_for, organization):
        response = client_for(organization).delete(group_url(999999))

        assert response.status_code == 404
        assert response.data["error_code"] == "GROUP_NOT_FOUND"

    def test_post_and_fetch_messages(self, client_for, group, organization, volunteer):
        sent = client_for(volunteer).post(
            group_url(group.pk, "messages/"), {"content": "On my way"}, format="json"
        )
        fetched = client_for(organization).get(group_url(group.pk, "messages/"))

        assert sent.status_code == 201
        assert sent.data["groupId"] == group.pk
        assert sent.data["receiverId"] is None
        assert fetched.status_code == 200
        [message] = fetched.data["messages"]
        assert message["content"] == "On my way"
        assert message["readBy"] == [volunteer.pk]

    def test_outsider_cannot_read_messages(self, client_for, group, other_volunteer):
        response = client_for(other_volunteer).get(group_url(group.pk, "messages/"))

        assert response.status_code == 403

    def test_add_members(self, client_for, group, organization, other_volunteer):
        response = client_for(organization).post(
            group_url(group.pk, "members/"), {"memberIds": [other_volunteer.pk]}, format="json"
        )

        assert response.status_code == 200
        assert other_volunteer.pk in {m["id"] for m in response.data["members"]}

    def test_add_members_empty_list(self, client_for, group, organization):
        response = client_for(organization).post(
            group_url(group.pk, "members/"), {"memberIds": []}, format="json"
        )

        assert response.status_code == 400

    def test_remove_member(self, client_for, group, organization, volunteer):
        response = client_for(organization).delete(group_url(group.pk, f"members/{volunteer.pk}/"))

        assert response.status_code == 200
        assert volunteer.pk not in {m["id"] for m in response.data["members"]}

    def test_remove_last_admin_conflict(self, client_for, admin, group, organization):
        response = client_for(admin).delete(group_url(group.pk, f"members/{organization.pk}/"))

        assert response.status_code == 409
        assert response.data["error_code"] == "LAST_ADMIN"

    def test_remove_creator_conflict(self, client_for, organization, volunteer):
        group = GroupFactory(created_by=organization, admins=[volunteer])

        response = client_for(volunteer).delete(
            group_url(group.pk, f"members/{organization.pk}/")
        )

        assert response.status_code == 409
        assert response.data["error_code"] == "CANNOT_REMOVE_CREATOR"
