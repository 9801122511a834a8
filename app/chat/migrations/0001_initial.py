"""
Create Group, Message and MessageReadReceipt.

Message carries a check constraint requiring exactly one of receiver or
group, plus partial indexes for direct and group thread pagination.
"""

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


def timestamp_fields():
    return [
        (
            "created_at",
            models.DateTimeField(
                auto_now_add=True,
                db_index=True,
                help_text="When this record was created",
            ),
        ),
        (
            "updated_at",
            models.DateTimeField(
                auto_now=True,
                help_text="When this record was last modified",
            ),
        ),
    ]


def id_field():
    return (
        "id",
        models.BigAutoField(
            auto_created=True,
            primary_key=True,
            serialize=False,
            verbose_name="ID",
        ),
    )


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Group",
            fields=[
                id_field(),
                *timestamp_fields(),
                ("name", models.CharField(help_text="Group display name", max_length=200)),
                (
                    "description",
                    models.TextField(blank=True, default="", help_text="Optional group description"),
                ),
                (
                    "is_organization_group",
                    models.BooleanField(
                        default=False,
                        help_text="Organization-wide group (admin-created only)",
                    ),
                ),
                (
                    "opportunity_id",
                    models.CharField(
                        blank=True,
                        db_index=True,
                        default="",
                        help_text="Linked opportunity identifier (empty if none)",
                        max_length=64,
                    ),
                ),
                (
                    "avatar",
                    models.URLField(
                        blank=True, default="", help_text="Optional avatar URL", max_length=500
                    ),
                ),
                (
                    "admins",
                    models.ManyToManyField(
                        blank=True,
                        help_text="Members who can manage this group",
                        related_name="administered_chat_groups",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "created_by",
                    models.ForeignKey(
                        help_text="User who created this group",
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="created_chat_groups",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "members",
                    models.ManyToManyField(
                        blank=True,
                        help_text="Users who belong to this group",
                        related_name="chat_groups",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "chat_group",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="Message",
            fields=[
                id_field(),
                *timestamp_fields(),
                ("content", models.TextField(help_text="Message text")),
                (
                    "media_url",
                    models.URLField(
                        blank=True,
                        default="",
                        help_text="URL of attached media in the blob store",
                        max_length=1000,
                    ),
                ),
                (
                    "media_kind",
                    models.CharField(
                        blank=True,
                        choices=[("image", "Image"), ("video", "Video")],
                        default="",
                        help_text="Kind of attached media",
                        max_length=10,
                    ),
                ),
                (
                    "media_mime_type",
                    models.CharField(
                        blank=True, default="", help_text="MIME type of attached media", max_length=100
                    ),
                ),
                (
                    "media_file_name",
                    models.CharField(
                        blank=True,
                        default="",
                        help_text="Original file name of attached media",
                        max_length=255,
                    ),
                ),
                (
                    "media_size",
                    models.PositiveBigIntegerField(
                        blank=True, help_text="Size of attached media in bytes", null=True
                    ),
                ),
                (
                    "is_read",
                    models.BooleanField(
                        db_index=True,
                        default=False,
                        help_text="Whether the direct recipient has read this message",
                    ),
                ),
                (
                    "group",
                    models.ForeignKey(
                        blank=True,
                        help_text="Group this message was posted to (null for direct messages)",
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="messages",
                        to="chat.group",
                    ),
                ),
                (
                    "receiver",
                    models.ForeignKey(
                        blank=True,
                        help_text="Direct recipient (null for group messages)",
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="received_messages",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "sender",
                    models.ForeignKey(
                        help_text="User who sent this message",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="sent_messages",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "chat_message",
                "ordering": ["created_at", "id"],
                "indexes": [
                    models.Index(
                        condition=models.Q(("group__isnull", True)),
                        fields=["sender", "receiver", "-id"],
                        name="chat_msg_direct_idx",
                    ),
                    models.Index(
                        condition=models.Q(("group__isnull", False)),
                        fields=["group", "-id"],
                        name="chat_msg_group_idx",
                    ),
                    models.Index(
                        fields=["receiver", "is_read"],
                        name="chat_msg_unread_idx",
                    ),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(("group__isnull", True), ("receiver__isnull", False)),
                            models.Q(("group__isnull", False), ("receiver__isnull", True)),
                            _connector="OR",
                        ),
                        name="chat_message_exactly_one_target",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="MessageReadReceipt",
            fields=[
                id_field(),
                (
                    "read_at",
                    models.DateTimeField(
                        default=django.utils.timezone.now,
                        help_text="When the message was read",
                    ),
                ),
                (
                    "message",
                    models.ForeignKey(
                        help_text="Message that was read",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="read_receipts",
                        to="chat.message",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        help_text="User who read the message",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="message_read_receipts",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "chat_message_read_receipt",
                "ordering": ["read_at"],
                "indexes": [
                    models.Index(
                        fields=["user", "message"],
                        name="chat_receipt_user_msg_idx",
                    ),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("message", "user"),
                        name="unique_message_read_receipt",
                    ),
                ],
            },
        ),
    ]
