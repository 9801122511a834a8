"""
Django admin configuration for chat models.

Provides admin interfaces for:
- Group management (members and admins)
- Message moderation
- Read receipt inspection
"""

from django.contrib import admin

from chat.models import Group, Message, MessageReadReceipt


@admin.register(Group)
class GroupAdmin(admin.ModelAdmin):
    """Admin interface for Group model."""

    list_display = [
        "id",
        "name",
        "created_by",
        "is_organization_group",
        "opportunity_id",
        "created_at",
    ]
    list_filter = ["is_organization_group", "created_at"]
    search_fields = ["name", "opportunity_id", "created_by__email"]
    readonly_fields = ["created_at", "updated_at"]
    raw_id_fields = ["created_by"]
    filter_horizontal = ["members", "admins"]
    ordering = ["-created_at"]


class MessageReadReceiptInline(admin.TabularInline):
    """Inline display of read receipts on a message."""

    model = MessageReadReceipt
    extra = 0
    readonly_fields = ["user", "read_at"]
    can_delete = False


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    """Admin interface for Message model."""

    list_display = [
        "id",
        "sender",
        "receiver",
        "group",
        "content_preview",
        "media_kind",
        "is_read",
        "created_at",
    ]
    list_filter = ["media_kind", "is_read", "created_at"]
    search_fields = ["content", "sender__email", "receiver__email", "group__name"]
    readonly_fields = ["created_at", "updated_at"]
    raw_id_fields = ["sender", "receiver", "group"]
    inlines = [MessageReadReceiptInline]
    ordering = ["-created_at"]

    @admin.display(description="Content Preview")
    def content_preview(self, obj: Message) -> str:
        max_length = 50
        if len(obj.content) > max_length:
            return obj.content[:max_length] + "..."
        return obj.content


@admin.register(MessageReadReceipt)
class MessageReadReceiptAdmin(admin.ModelAdmin):
    list_display = ["id", "message", "user", "read_at"]
    raw_id_fields = ["message", "user"]
    ordering = ["-read_at"]
