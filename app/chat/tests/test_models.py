"""
Tests for chat models.

Covers:
- Message.build(): target handling, empty messages, media placeholders
- Message.target for valid and inconsistent rows
- The exactly-one-target database constraint
- MessageReadReceipt uniqueness
"""

import pytest
from django.db import IntegrityError, transaction

from chat.models import (
    DirectTarget,
    GroupTarget,
    MediaDescriptor,
    MediaKind,
    Message,
    MessageReadReceipt,
)
from chat.tests.factories import DirectMessageFactory, GroupMessageFactory
from core.exceptions import ValidationError


class TestMessageBuild:
    def test_direct_target_sets_receiver_only(self, organization, volunteer):
        message = Message.build(organization, DirectTarget(volunteer.pk), "Hello")

        assert message.receiver_id == volunteer.pk
        assert message.group_id is None
        assert message.content == "Hello"

    def test_group_target_sets_group_only(self, group, volunteer):
        message = Message.build(volunteer, GroupTarget(group.pk), "Hi all")

        assert message.group_id == group.pk
        assert message.receiver_id is None

    def test_unknown_target_rejected(self, organization):
        with pytest.raises(ValidationError) as exc_info:
            Message.build(organization, object(), "Hello")

        assert exc_info.value.error_code == "INVALID_MESSAGE_TARGET"

    def test_empty_message_rejected(self, organization, volunteer):
        with pytest.raises(ValidationError) as exc_info:
            Message.build(organization, DirectTarget(volunteer.pk), "")

        assert exc_info.value.error_code == "EMPTY_MESSAGE"

    @pytest.mark.parametrize(
        "kind,expected",
        [(MediaKind.IMAGE, "Sent an image"), (MediaKind.VIDEO, "Sent a video")],
    )
    def test_media_only_message_gets_placeholder(self, organization, volunteer, kind, expected):
        media = MediaDescriptor(url="https://cdn.example.com/a", kind=kind)

        message = Message.build(organization, DirectTarget(volunteer.pk), "", media)

        assert message.content == expected
        assert message.media_kind == kind

    def test_content_kept_alongside_media(self, organization, volunteer):
        media = MediaDescriptor(
            url="https://cdn.example.com/photo.jpg",
            kind=MediaKind.IMAGE,
            mime_type="image/jpeg",
            file_name="photo.jpg",
            size=2048,
        )

        message = Message.build(organization, DirectTarget(volunteer.pk), "Look!", media)
        message.save()
        message.refresh_from_db()

        assert message.content == "Look!"
        assert message.media == media


class TestMessageTarget:
    def test_direct_message_target(self, db):
        message = DirectMessageFactory()

        assert message.target == DirectTarget(message.receiver_id)
        assert message.is_direct

    def test_group_message_target(self, db):
        message = GroupMessageFactory()

        assert message.target == GroupTarget(message.group_id)
        assert not message.is_direct

    def test_inconsistent_row_raises(self, organization):
        message = Message(sender=organization, content="orphan")

        with pytest.raises(ValidationError) as exc_info:
            message.target

        assert exc_info.value.error_code == "INVALID_MESSAGE_TARGET"

    def test_media_is_none_without_url(self, db):
        assert DirectMessageFactory().media is None


class TestMessageConstraint:
    """
    Database backstop for the exactly-one-target rule.

    Why it matters: Rows written outside Message.build() (admin, raw
    queries, data fixes) must still never be both direct and group.
    """

    def test_neither_target_rejected(self, organization):
        with pytest.raises(IntegrityError), transaction.atomic():
            Message.objects.create(sender=organization, content="nowhere")

    def test_both_targets_rejected(self, group, organization, volunteer):
        with pytest.raises(IntegrityError), transaction.atomic():
            Message.objects.create(
                sender=organization, receiver=volunteer, group=group, content="everywhere"
            )


class TestMessageReadReceipt:
    def test_one_receipt_per_reader(self, volunteer):
        message = GroupMessageFactory()
        MessageReadReceipt.objects.create(message=message, user=volunteer)

        with pytest.raises(IntegrityError), transaction.atomic():
            MessageReadReceipt.objects.create(message=message, user=volunteer)

    def test_str(self, volunteer):
        message = GroupMessageFactory()
        receipt = MessageReadReceipt.objects.create(message=message, user=volunteer)

        assert str(receipt) == f"Read: message {message.pk} by {volunteer.pk}"
