"""
Chat system models.

This module defines the data models for the chat system supporting:
- Direct (1:1) threads, derived from messages between two users
- Group threads with an explicit member and admin set

Models:
    Group: Named set of members with an admin subset
    Message: A message addressed to exactly one receiver or one group
    MessageReadReceipt: Append-only (message, reader) read log

Target types:
    DirectTarget / GroupTarget: Tagged variant for a message's destination.
    Message.target returns one of them; Message.build() accepts one.

Design Decisions:
    - Direct threads have no container row; a thread is the set of messages
      between two users and is listed by aggregation (chat.services)
    - Exactly one of receiver/group is set, enforced by Message.build() and
      by a database check constraint
    - Direct messages carry an is_read flag for the fast unread path;
      read receipts record per-reader reads for both kinds
    - Message ids increase with creation time and double as pagination cursors
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from django.conf import settings
from django.db import models
from django.db.models import Q
from django.utils import timezone

from core.exceptions import ValidationError
from core.models import BaseModel

if TYPE_CHECKING:
    from authentication.models import User


class MediaKind(models.TextChoices):
    """Kind of media attached to a message."""

    IMAGE = "image", "Image"
    VIDEO = "video", "Video"


@dataclass(frozen=True)
class DirectTarget:
    """Message addressed to a single user."""

    receiver_id: int


@dataclass(frozen=True)
class GroupTarget:
    """Message posted to a group."""

    group_id: int


MessageTarget = Union[DirectTarget, GroupTarget]


@dataclass(frozen=True)
class MediaDescriptor:
    """
    Reference to media stored in the external blob store.

    Only the URL and descriptive metadata are kept; the bytes never pass
    through this service.
    """

    url: str
    kind: str
    mime_type: str = ""
    file_name: str = ""
    size: int | None = None

    @property
    def placeholder_content(self) -> str:
        """Content used for media-only messages."""
        if self.kind == MediaKind.IMAGE:
            return "Sent an image"
        return "Sent a video"


class Group(BaseModel):
    """
    A group conversation.

    Invariants (maintained by chat.services.GroupService):
        - created_by is always in members
        - admins is a subset of members
        - admins is never empty

    Fields:
        name: Group display name
        description: Optional description
        members: Users who can read and post
        admins: Members with management rights
        created_by: User who created the group
        is_organization_group: Flagged variant, only admins may create one
        opportunity_id: Linked opportunity (enables mentor management)
        avatar: Optional avatar URL
    """

    name = models.CharField(
        max_length=200,
        help_text="Group display name",
    )

    description = models.TextField(
        blank=True,
        default="",
        help_text="Optional group description",
    )

    members = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        related_name="chat_groups",
        blank=True,
        help_text="Users who belong to this group",
    )

    admins = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        related_name="administered_chat_groups",
        blank=True,
        help_text="Members who can manage this group",
    )

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="created_chat_groups",
        help_text="User who created this group",
    )

    is_organization_group = models.BooleanField(
        default=False,
        help_text="Organization-wide group (admin-created only)",
    )

    opportunity_id = models.CharField(
        max_length=64,
        blank=True,
        default="",
        db_index=True,
        help_text="Linked opportunity identifier (empty if none)",
    )

    avatar = models.URLField(
        max_length=500,
        blank=True,
        default="",
        help_text="Optional avatar URL",
    )

    class Meta:
        db_table = "chat_group"
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"Group: {self.name}"

    def is_member(self, user: User) -> bool:
        return self.members.filter(pk=user.pk).exists()

    def is_admin(self, user: User) -> bool:
        return self.admins.filter(pk=user.pk).exists()


class Message(BaseModel):
    """
    A single message.

    A message targets either one receiver (direct) or one group, never both
    and never neither. Use Message.build() to construct one from a target;
    the check constraint rejects anything that slips past it.

    Fields:
        sender: Author
        receiver: Direct recipient (null for group messages)
        group: Group (null for direct messages)
        content: Text content (placeholder text for media-only messages)
        media_*: Optional media descriptor columns
        is_read: Direct messages only; flipped when the receiver reads

    Ordering:
        (created_at, id). Ids are the pagination cursor.
    """

    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="sent_messages",
        help_text="User who sent this message",
    )

    receiver = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="received_messages",
        help_text="Direct recipient (null for group messages)",
    )

    group = models.ForeignKey(
        Group,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="messages",
        help_text="Group this message was posted to (null for direct messages)",
    )

    content = models.TextField(
        help_text="Message text",
    )

    media_url = models.URLField(
        max_length=1000,
        blank=True,
        default="",
        help_text="URL of attached media in the blob store",
    )
    media_kind = models.CharField(
        max_length=10,
        choices=MediaKind.choices,
        blank=True,
        default="",
        help_text="Kind of attached media",
    )
    media_mime_type = models.CharField(
        max_length=100,
        blank=True,
        default="",
        help_text="MIME type of attached media",
    )
    media_file_name = models.CharField(
        max_length=255,
        blank=True,
        default="",
        help_text="Original file name of attached media",
    )
    media_size = models.PositiveBigIntegerField(
        null=True,
        blank=True,
        help_text="Size of attached media in bytes",
    )

    is_read = models.BooleanField(
        default=False,
        db_index=True,
        help_text="Whether the direct recipient has read this message",
    )

    class Meta:
        db_table = "chat_message"
        ordering = ["created_at", "id"]
        indexes = [
            # Direct thread lookups in both directions
            models.Index(
                fields=["sender", "receiver", "-id"],
                name="chat_msg_direct_idx",
                condition=Q(group__isnull=True),
            ),
            # Group thread pagination
            models.Index(
                fields=["group", "-id"],
                name="chat_msg_group_idx",
                condition=Q(group__isnull=False),
            ),
            # Unread counts for a receiver
            models.Index(
                fields=["receiver", "is_read"],
                name="chat_msg_unread_idx",
            ),
        ]
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(receiver__isnull=False, group__isnull=True)
                    | Q(receiver__isnull=True, group__isnull=False)
                ),
                name="chat_message_exactly_one_target",
            ),
        ]

    def __str__(self) -> str:
        content_preview = (
            self.content[:50] + "..." if len(self.content) > 50 else self.content
        )
        return f"User {self.sender_id}: {content_preview}"

    @classmethod
    def build(
        cls,
        sender: User,
        target: MessageTarget,
        content: str = "",
        media: MediaDescriptor | None = None,
    ) -> Message:
        """
        Build an unsaved message for a target.

        Raises:
            core.exceptions.ValidationError: If target is not a DirectTarget
                or GroupTarget, or if there is neither content nor media
        """
        if isinstance(target, DirectTarget):
            message = cls(sender=sender, receiver_id=target.receiver_id)
        elif isinstance(target, GroupTarget):
            message = cls(sender=sender, group_id=target.group_id)
        else:
            raise ValidationError(
                "Message must target exactly one of receiver or group",
                error_code="INVALID_MESSAGE_TARGET",
            )

        if not content and media is None:
            raise ValidationError(
                "Content or media is required",
                error_code="EMPTY_MESSAGE",
            )

        message.content = content or media.placeholder_content
        if media is not None:
            message.media_url = media.url
            message.media_kind = media.kind
            message.media_mime_type = media.mime_type
            message.media_file_name = media.file_name
            message.media_size = media.size
        return message

    @property
    def target(self) -> MessageTarget:
        """
        Destination as a tagged variant.

        Raises:
            core.exceptions.ValidationError: If the row violates the
                exactly-one-target rule
        """
        if self.receiver_id is not None and self.group_id is None:
            return DirectTarget(receiver_id=self.receiver_id)
        if self.group_id is not None and self.receiver_id is None:
            return GroupTarget(group_id=self.group_id)
        raise ValidationError(
            "Message must target exactly one of receiver or group",
            error_code="INVALID_MESSAGE_TARGET",
            details={"message_id": self.pk},
        )

    @property
    def is_direct(self) -> bool:
        return isinstance(self.target, DirectTarget)

    @property
    def media(self) -> MediaDescriptor | None:
        if not self.media_url:
            return None
        return MediaDescriptor(
            url=self.media_url,
            kind=self.media_kind,
            mime_type=self.media_mime_type,
            file_name=self.media_file_name,
            size=self.media_size,
        )


class MessageReadReceipt(models.Model):
    """
    One reader's read of one message.

    Append-only log backing group read state (and recorded for direct
    messages as well). At most one receipt per (message, user).
    """

    message = models.ForeignKey(
        Message,
        on_delete=models.CASCADE,
        related_name="read_receipts",
        help_text="Message that was read",
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="message_read_receipts",
        help_text="User who read the message",
    )

    read_at = models.DateTimeField(
        default=timezone.now,
        help_text="When the message was read",
    )

    class Meta:
        db_table = "chat_message_read_receipt"
        ordering = ["read_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["message", "user"],
                name="unique_message_read_receipt",
            ),
        ]
        indexes = [
            models.Index(
                fields=["user", "message"],
                name="chat_receipt_user_msg_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"Read: message {self.message_id} by {self.user_id}"
