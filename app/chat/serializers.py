"""
Serializers for chat API.

Field names follow the mobile client's camelCase contract; model fields are
mapped with `source=`.

Serializer Hierarchy:
    Read:
        MessageSerializer: A message with sender summary and media
        MessagePageSerializer: {messages, nextCursor}
        ConversationSerializer: Direct thread summary
        GroupSerializer: Group with members and admins
        GroupListItemSerializer: GroupSerializer + lastMessage, unreadCount

    Write:
        MediaInputSerializer: Media descriptor (URL already uploaded)
        DirectMessageCreateSerializer: {receiverId, content, media}
        GroupMessageCreateSerializer: {content, media}
        GroupCreateSerializer / GroupUpdateSerializer
        GroupMembersSerializer: {memberIds}

Design Decisions:
    - Read and write serializers are separate
    - Write serializers only check shape; business rules live in services
"""

from __future__ import annotations

from rest_framework import serializers

from authentication.models import User
from chat.constants import GROUP_CONFIG, MESSAGE_CONFIG
from chat.models import Group, MediaDescriptor, MediaKind, Message


# =============================================================================
# Read serializers
# =============================================================================


class ChatUserSerializer(serializers.ModelSerializer):
    """Sender/member shape inside chat payloads."""

    class Meta:
        model = User
        fields = ["id", "name", "image", "role"]
        read_only_fields = fields


class CounterpartySerializer(serializers.ModelSerializer):
    organizationTitle = serializers.CharField(
        source="organization_title", allow_null=True, read_only=True
    )

    class Meta:
        model = User
        fields = ["id", "name", "image", "role", "organizationTitle"]
        read_only_fields = fields


class MediaSerializer(serializers.Serializer):
    url = serializers.URLField()
    kind = serializers.CharField()
    mimeType = serializers.CharField(source="mime_type")
    fileName = serializers.CharField(source="file_name")
    size = serializers.IntegerField(allow_null=True)


class MessageSerializer(serializers.ModelSerializer):
    """
    A single message.

    readBy lists reader ids from the receipt log. Querysets should prefetch
    read_receipts to avoid one query per message.
    """

    sender = ChatUserSerializer(read_only=True)
    receiverId = serializers.IntegerField(source="receiver_id", allow_null=True, read_only=True)
    groupId = serializers.IntegerField(source="group_id", allow_null=True, read_only=True)
    media = MediaSerializer(allow_null=True, read_only=True)
    isRead = serializers.BooleanField(source="is_read", read_only=True)
    readBy = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Message
        fields = [
            "id",
            "sender",
            "receiverId",
            "groupId",
            "content",
            "media",
            "isRead",
            "readBy",
            "createdAt",
        ]
        read_only_fields = fields

    def get_readBy(self, obj: Message) -> list[int]:
        return [receipt.user_id for receipt in obj.read_receipts.all()]


class MessagePageSerializer(serializers.Serializer):
    messages = MessageSerializer(many=True)
    nextCursor = serializers.IntegerField(source="next_cursor", allow_null=True)


class LastMessageSerializer(serializers.Serializer):
    content = serializers.CharField()
    isRead = serializers.BooleanField()
    createdAt = serializers.DateTimeField()


class ConversationSerializer(serializers.Serializer):
    """Direct thread summary for the conversations list."""

    counterpartyId = serializers.IntegerField(source="counterparty.pk")
    counterparty = CounterpartySerializer()
    lastMessage = serializers.SerializerMethodField()
    unreadCount = serializers.IntegerField(source="unread_count")

    def get_lastMessage(self, obj) -> dict:
        message = obj.last_message
        return LastMessageSerializer(
            {
                "content": message.content,
                "isRead": message.is_read,
                "createdAt": message.created_at,
            }
        ).data


class GroupSerializer(serializers.ModelSerializer):
    members = ChatUserSerializer(many=True, read_only=True)
    admins = ChatUserSerializer(many=True, read_only=True)
    createdBy = serializers.IntegerField(source="created_by_id", read_only=True)
    isOrganizationGroup = serializers.BooleanField(source="is_organization_group", read_only=True)
    opportunityId = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Group
        fields = [
            "id",
            "name",
            "description",
            "avatar",
            "members",
            "admins",
            "createdBy",
            "isOrganizationGroup",
            "opportunityId",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields

    def get_opportunityId(self, obj: Group) -> str | None:
        return obj.opportunity_id or None


class GroupListItemSerializer(serializers.Serializer):
    """GroupSerializer fields plus lastMessage and unreadCount."""

    def to_representation(self, instance):
        data = GroupSerializer(instance.group).data
        message = instance.last_message
        data["lastMessage"] = (
            LastMessageSerializer(
                {
                    "content": message.content,
                    "isRead": instance.last_message_read,
                    "createdAt": message.created_at,
                }
            ).data
            if message is not None
            else None
        )
        data["unreadCount"] = instance.unread_count
        return data


# =============================================================================
# Write serializers
# =============================================================================


class MediaInputSerializer(serializers.Serializer):
    """Media already stored in the blob store."""

    url = serializers.URLField(max_length=MESSAGE_CONFIG.MAX_MEDIA_URL_LENGTH)
    kind = serializers.ChoiceField(choices=MediaKind.choices)
    mimeType = serializers.CharField(max_length=100, required=False, default="")
    fileName = serializers.CharField(max_length=255, required=False, default="")
    size = serializers.IntegerField(min_value=0, required=False, allow_null=True, default=None)


def media_descriptor(validated_media: dict | None) -> MediaDescriptor | None:
    """Convert validated media input into a MediaDescriptor."""
    if not validated_media:
        return None
    return MediaDescriptor(
        url=validated_media["url"],
        kind=validated_media["kind"],
        mime_type=validated_media.get("mimeType", ""),
        file_name=validated_media.get("fileName", ""),
        size=validated_media.get("size"),
    )


class GroupMessageCreateSerializer(serializers.Serializer):
    content = serializers.CharField(
        max_length=MESSAGE_CONFIG.MAX_CONTENT_LENGTH,
        required=False,
        allow_blank=True,
        default="",
    )
    media = MediaInputSerializer(required=False, allow_null=True, default=None)


class DirectMessageCreateSerializer(GroupMessageCreateSerializer):
    """Direct message body; receiverId presence is checked by MessageService."""

    receiverId = serializers.IntegerField(required=False, allow_null=True, default=None)


class GroupCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=GROUP_CONFIG.MAX_NAME_LENGTH)
    description = serializers.CharField(
        max_length=GROUP_CONFIG.MAX_DESCRIPTION_LENGTH,
        required=False,
        allow_blank=True,
        default="",
    )
    memberIds = serializers.ListField(
        child=serializers.IntegerField(min_value=1),
        allow_empty=True,
        max_length=GROUP_CONFIG.MAX_MEMBERS_PER_REQUEST,
    )
    isOrganizationGroup = serializers.BooleanField(required=False, default=False)
    opportunityId = serializers.CharField(
        max_length=64, required=False, allow_blank=True, allow_null=True, default=None
    )
    avatar = serializers.URLField(max_length=500, required=False, allow_blank=True, default="")


class GroupUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=GROUP_CONFIG.MAX_NAME_LENGTH, required=False)
    description = serializers.CharField(
        max_length=GROUP_CONFIG.MAX_DESCRIPTION_LENGTH,
        required=False,
        allow_blank=True,
    )
    avatar = serializers.URLField(max_length=500, required=False, allow_blank=True)


class GroupMembersSerializer(serializers.Serializer):
    memberIds = serializers.ListField(
        child=serializers.IntegerField(min_value=1),
        allow_empty=False,
        max_length=GROUP_CONFIG.MAX_MEMBERS_PER_REQUEST,
    )


class MarkReadResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    updatedCount = serializers.IntegerField()


class DeleteGroupResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    message = serializers.CharField()
