"""
Chat system service layer.

This module provides the business logic for direct and group messaging.

Services:
    ConversationService: Direct thread listing (derived from messages)
    ReadStateService: Read flags, read receipts and unread counts
    MessageService: Fetch and send for direct and group threads
    GroupService: Group lifecycle and membership

Design Principles:
    - Services are stateless (use class methods)
    - Expected failures return ServiceResult.failure() with an ErrorKind
    - Unexpected failures (database errors) propagate
    - Multi-row writes run inside one transaction

Usage:
    from chat.services import GroupService, MessageService

    result = MessageService.send_direct_message(
        sender=org_user,
        receiver_id=volunteer.pk,
        content="Welcome aboard!",
    )
    if result.success:
        message = result.data

    result = GroupService.create_group(
        creator=org_user,
        name="Beach clean-up crew",
        member_ids=[volunteer.pk],
    )
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from django.db.models import Count, OuterRef, Q, Subquery
from django.utils import timezone

from authentication.models import User
from chat.authorization import GroupAuthorizationService
from chat.models import (
    DirectTarget,
    Group,
    GroupTarget,
    MediaDescriptor,
    Message,
    MessageReadReceipt,
)
from chat.pagination import MessagePage, ThreadCursorPaginator
from core.services import BaseService, ErrorKind, ServiceResult
from organizations.services import MentorAssignmentService

if TYPE_CHECKING:
    from collections.abc import Iterable


@dataclass
class ConversationSummary:
    """One direct thread as seen by a user."""

    counterparty: User
    last_message: Message
    unread_count: int


@dataclass
class GroupSummary:
    """One group as seen by a member."""

    group: Group
    last_message: Message | None
    last_message_read: bool
    unread_count: int


def _empty_message_failure() -> ServiceResult:
    return ServiceResult.failure(
        "Content or media is required",
        error_code="EMPTY_MESSAGE",
        kind=ErrorKind.VALIDATION,
        errors={"content": ["Provide content or media."]},
    )


def _group_not_found() -> ServiceResult:
    return ServiceResult.failure(
        "Group not found",
        error_code="GROUP_NOT_FOUND",
        kind=ErrorKind.NOT_FOUND,
    )


def _user_not_found(code: str = "USER_NOT_FOUND") -> ServiceResult:
    return ServiceResult.failure(
        "User not found",
        error_code=code,
        kind=ErrorKind.NOT_FOUND,
    )


class ConversationService(BaseService):
    """
    Direct thread listing.

    There is no conversation table. A thread between A and B is the set of
    non-group messages with {sender, receiver} = {A, B}.
    """

    @classmethod
    def direct_messages_for(cls, user: User):
        """All direct messages the user sent or received."""
        return Message.objects.filter(
            Q(sender=user) | Q(receiver=user),
            group__isnull=True,
        )

    @classmethod
    def thread_between(cls, user: User, counterparty_id: int):
        """Direct messages between `user` and `counterparty_id`, both directions."""
        return Message.objects.filter(
            Q(sender=user, receiver_id=counterparty_id)
            | Q(sender_id=counterparty_id, receiver=user),
            group__isnull=True,
        )

    @classmethod
    def list_conversations(cls, user: User) -> ServiceResult[list[ConversationSummary]]:
        """
        One entry per counterparty, most recent activity first.

        The last message is the latest by (created_at, id). The unread count
        covers messages where `user` is the receiver and is_read is false.
        """
        messages = (
            cls.direct_messages_for(user)
            .select_related(
                "sender",
                "sender__organization_profile",
                "receiver",
                "receiver__organization_profile",
            )
            .order_by("-created_at", "-id")
        )

        summaries: dict[int, ConversationSummary] = {}
        for message in messages.iterator(chunk_size=500):
            if message.sender_id == user.pk:
                counterparty = message.receiver
            else:
                counterparty = message.sender

            summary = summaries.get(counterparty.pk)
            if summary is None:
                # First hit per counterparty is the latest message
                summary = ConversationSummary(
                    counterparty=counterparty,
                    last_message=message,
                    unread_count=0,
                )
                summaries[counterparty.pk] = summary

            if message.receiver_id == user.pk and not message.is_read:
                summary.unread_count += 1

        conversations = list(summaries.values())
        cls.get_logger().debug(f"User {user.pk} has {len(conversations)} conversations")
        return ServiceResult.success(conversations)


class ReadStateService(BaseService):
    """
    Read-state tracking.

    Direct messages: the is_read flag plus a receipt for the reader.
    Group messages: one receipt per (message, reader); a member's unread
    count ignores messages they authored.
    """

    @classmethod
    def _append_receipts(cls, reader: User, message_ids: Iterable[int]) -> None:
        now = timezone.now()
        MessageReadReceipt.objects.bulk_create(
            [
                MessageReadReceipt(message_id=message_id, user=reader, read_at=now)
                for message_id in message_ids
            ],
            ignore_conflicts=True,
        )

    @classmethod
    def mark_direct_read(cls, reader: User, counterparty_id: int) -> int:
        """
        Mark every unread message from counterparty to reader as read.

        Returns:
            Number of messages flipped to read
        """
        with cls.atomic():
            unread_ids = list(
                Message.objects.filter(
                    sender_id=counterparty_id,
                    receiver=reader,
                    group__isnull=True,
                    is_read=False,
                ).values_list("id", flat=True)
            )
            if not unread_ids:
                return 0

            updated = Message.objects.filter(id__in=unread_ids, is_read=False).update(
                is_read=True
            )
            cls._append_receipts(reader, unread_ids)

        cls.get_logger().debug(
            f"User {reader.pk} read {updated} messages from {counterparty_id}"
        )
        return updated

    @classmethod
    def mark_group_read(cls, reader: User, group: Group) -> int:
        """
        Record a receipt on every group message the reader has not read.

        Returns:
            Number of receipts added
        """
        with cls.atomic():
            unread_ids = list(
                Message.objects.filter(group=group)
                .exclude(read_receipts__user=reader)
                .values_list("id", flat=True)
            )
            if unread_ids:
                cls._append_receipts(reader, unread_ids)

        cls.get_logger().debug(
            f"User {reader.pk} read {len(unread_ids)} messages in group {group.pk}"
        )
        return len(unread_ids)

    @staticmethod
    def direct_unread_count(user: User, counterparty_id: int | None = None) -> int:
        queryset = Message.objects.filter(receiver=user, group__isnull=True, is_read=False)
        if counterparty_id is not None:
            queryset = queryset.filter(sender_id=counterparty_id)
        return queryset.count()

    @staticmethod
    def group_unread_count(user: User, group: Group) -> int:
        return (
            Message.objects.filter(group=group)
            .exclude(sender=user)
            .exclude(read_receipts__user=user)
            .count()
        )

    @classmethod
    def mark_conversation_read(
        cls, reader: User, counterparty_id: int
    ) -> ServiceResult[int]:
        """Explicit mark-read endpoint; returns the number of updated messages."""
        if not User.objects.filter(pk=counterparty_id).exists():
            return _user_not_found()
        return ServiceResult.success(cls.mark_direct_read(reader, counterparty_id))


class MessageService(BaseService):
    """
    Fetching and sending messages.

    Fetches page through ThreadCursorPaginator and then mark the page's
    thread read for the caller.
    """

    @classmethod
    def get_direct_messages(
        cls,
        user: User,
        counterparty_id: int,
        limit=None,
        cursor=None,
    ) -> ServiceResult[MessagePage]:
        """
        One page of the direct thread with `counterparty_id`.

        Side effect: messages from the counterparty are marked read.
        """
        paginator = ThreadCursorPaginator.from_params(limit=limit, cursor=cursor)
        if not paginator.success:
            return paginator

        if not User.objects.filter(pk=counterparty_id).exists():
            return _user_not_found()

        thread = (
            ConversationService.thread_between(user, counterparty_id)
            .select_related("sender")
            .prefetch_related("read_receipts")
        )
        page = paginator.data.paginate(thread)
        ReadStateService.mark_direct_read(user, counterparty_id)

        cls.get_logger().debug(
            f"User {user.pk} fetched {len(page.messages)} messages with {counterparty_id}"
        )
        return ServiceResult.success(page)

    @classmethod
    def send_direct_message(
        cls,
        sender: User,
        receiver_id: int | None,
        content: str | None = None,
        media: MediaDescriptor | None = None,
    ) -> ServiceResult[Message]:
        """
        Send a direct message.

        Error codes:
            VALIDATION_ERROR: receiverId missing
            EMPTY_MESSAGE: neither content nor media
            SAME_USER: receiver is the sender
            RECEIVER_NOT_FOUND: no such user
            CANNOT_INITIATE_CONVERSATION: sender may not open a new thread
        """
        validation = cls.validate_required(receiverId=receiver_id)
        if validation is not None:
            return validation
        if not content and media is None:
            return _empty_message_failure()

        if receiver_id == sender.pk:
            return ServiceResult.failure(
                "Cannot send a message to yourself",
                error_code="SAME_USER",
                kind=ErrorKind.VALIDATION,
            )

        receiver = User.objects.filter(pk=receiver_id).first()
        if receiver is None:
            return _user_not_found("RECEIVER_NOT_FOUND")

        allowed = GroupAuthorizationService.check_can_initiate_direct(sender, receiver)
        if not allowed:
            return allowed

        message = Message.build(sender, DirectTarget(receiver.pk), content or "", media)
        message.save()

        cls.get_logger().info(
            f"User {sender.pk} sent message {message.pk} to user {receiver.pk}"
        )
        return ServiceResult.success(message)

    @classmethod
    def get_group_messages(
        cls,
        user: User,
        group_id: int,
        limit=None,
        cursor=None,
    ) -> ServiceResult[MessagePage]:
        """
        One page of a group thread.

        Side effect: every message in the group gets a receipt for `user`.
        """
        group = Group.objects.filter(pk=group_id).first()
        if group is None:
            return _group_not_found()

        membership = GroupAuthorizationService.check_is_member(user, group)
        if not membership:
            return membership

        paginator = ThreadCursorPaginator.from_params(limit=limit, cursor=cursor)
        if not paginator.success:
            return paginator

        thread = (
            Message.objects.filter(group=group)
            .select_related("sender")
            .prefetch_related("read_receipts")
        )
        page = paginator.data.paginate(thread)
        ReadStateService.mark_group_read(user, group)

        cls.get_logger().debug(
            f"User {user.pk} fetched {len(page.messages)} messages in group {group.pk}"
        )
        return ServiceResult.success(page)

    @classmethod
    def send_group_message(
        cls,
        sender: User,
        group_id: int,
        content: str | None = None,
        media: MediaDescriptor | None = None,
    ) -> ServiceResult[Message]:
        """Post to a group; the sender's own receipt is recorded with it."""
        if not content and media is None:
            return _empty_message_failure()

        group = Group.objects.filter(pk=group_id).first()
        if group is None:
            return _group_not_found()

        membership = GroupAuthorizationService.check_is_member(sender, group)
        if not membership:
            return membership

        with cls.atomic():
            message = Message.build(sender, GroupTarget(group.pk), content or "", media)
            message.save()
            MessageReadReceipt.objects.create(message=message, user=sender)

        cls.get_logger().info(
            f"User {sender.pk} sent message {message.pk} to group {group.pk}"
        )
        return ServiceResult.success(message)


class GroupService(BaseService):
    """
    Group lifecycle and membership.

    Invariants kept by every write here:
        - the creator is a member
        - admins is a non-empty subset of members

    Permission checks go through GroupAuthorizationService.
    """

    @staticmethod
    def _load(group_id: int, for_update: bool = False) -> Group | None:
        queryset = Group.objects.all()
        if for_update:
            queryset = queryset.select_for_update()
        return queryset.filter(pk=group_id).first()

    @staticmethod
    def _resolve_users(user_ids: Iterable[int]) -> tuple[list[User], list[int]]:
        """Users for the given ids plus the ids that do not exist."""
        unique_ids = list(dict.fromkeys(user_ids))
        users = list(User.objects.filter(pk__in=unique_ids))
        found = {user.pk for user in users}
        return users, [pk for pk in unique_ids if pk not in found]

    @classmethod
    def list_groups(cls, user: User) -> ServiceResult[list[GroupSummary]]:
        """
        Groups the user belongs to with their latest message and unread count.

        Sorted by latest activity: the last message time, or the group's
        creation time when it has no messages. The number of queries does
        not depend on how many groups the user is in.
        """
        latest = (
            Message.objects.filter(group=OuterRef("pk"))
            .order_by("-created_at", "-id")
            .values("id")[:1]
        )
        groups = list(
            user.chat_groups.select_related("created_by")
            .prefetch_related("members", "admins")
            .annotate(last_message_id=Subquery(latest))
        )

        last_ids = [g.last_message_id for g in groups if g.last_message_id is not None]
        last_messages = Message.objects.select_related("sender").in_bulk(last_ids)
        read_ids = set(
            MessageReadReceipt.objects.filter(
                user=user, message_id__in=last_ids
            ).values_list("message_id", flat=True)
        )
        unread_by_group = {
            row["group_id"]: row["unread"]
            for row in Message.objects.filter(group__in=groups)
            .exclude(sender=user)
            .exclude(read_receipts__user=user)
            .values("group_id")
            .annotate(unread=Count("id"))
            .order_by()
        }

        summaries = [
            GroupSummary(
                group=group,
                last_message=last_messages.get(group.last_message_id),
                last_message_read=group.last_message_id in read_ids,
                unread_count=unread_by_group.get(group.pk, 0),
            )
            for group in groups
        ]

        def activity(summary: GroupSummary):
            if summary.last_message is not None:
                return (summary.last_message.created_at, summary.last_message.pk)
            return (summary.group.created_at, 0)

        summaries.sort(key=activity, reverse=True)
        cls.get_logger().debug(f"User {user.pk} belongs to {len(summaries)} groups")
        return ServiceResult.success(summaries)

    @classmethod
    def create_group(
        cls,
        creator: User,
        name: str,
        member_ids: Iterable[int],
        description: str = "",
        is_organization_group: bool = False,
        opportunity_id: str | None = None,
        avatar: str = "",
    ) -> ServiceResult[Group]:
        """
        Create a group.

        The creator joins as member and admin. When an opportunity is given,
        invited members who mentor it are made admins too.

        Error codes:
            VALIDATION_ERROR: name missing
            CANNOT_CREATE_GROUP / ORGANIZATION_GROUP_ADMIN_ONLY: see
                chat.authorization
            MEMBERS_NOT_FOUND: some member ids do not exist
        """
        validation = cls.validate_required(name=name)
        if validation is not None:
            return validation

        allowed = GroupAuthorizationService.check_can_create(
            creator,
            opportunity_id=opportunity_id,
            is_organization_group=is_organization_group,
        )
        if not allowed:
            return allowed

        invited_ids = [pk for pk in dict.fromkeys(member_ids) if pk != creator.pk]
        members, missing = cls._resolve_users(invited_ids)
        if missing:
            return ServiceResult.failure(
                "Some users were not found",
                error_code="MEMBERS_NOT_FOUND",
                kind=ErrorKind.NOT_FOUND,
                errors={"memberIds": [f"Unknown user id {pk}" for pk in missing]},
            )

        mentor_ids = set()
        if opportunity_id:
            mentor_ids = MentorAssignmentService.mentors_among(opportunity_id, invited_ids)

        with cls.atomic():
            group = Group.objects.create(
                name=name.strip(),
                description=description or "",
                created_by=creator,
                is_organization_group=is_organization_group,
                opportunity_id=opportunity_id or "",
                avatar=avatar or "",
            )
            group.members.add(creator, *members)
            group.admins.add(creator, *[user for user in members if user.pk in mentor_ids])

        cls.get_logger().info(
            f"User {creator.pk} created group {group.pk} with {len(members) + 1} members "
            f"({len(mentor_ids)} mentor admins)"
        )
        return ServiceResult.success(group)

    @classmethod
    def update_group(
        cls,
        actor: User,
        group_id: int,
        name: str | None = None,
        description: str | None = None,
        avatar: str | None = None,
    ) -> ServiceResult[Group]:
        """Change name, description or avatar; omitted fields stay as they are."""
        group = cls._load(group_id)
        if group is None:
            return _group_not_found()

        capabilities = GroupAuthorizationService.capabilities_for(actor, group)
        if not capabilities.can_update:
            return GroupAuthorizationService.deny_management("update")

        update_fields = []
        if name is not None:
            if not name.strip():
                return ServiceResult.failure(
                    "Group name cannot be blank",
                    error_code="VALIDATION_ERROR",
                    kind=ErrorKind.VALIDATION,
                    errors={"name": ["This field may not be blank."]},
                )
            group.name = name.strip()
            update_fields.append("name")
        if description is not None:
            group.description = description
            update_fields.append("description")
        if avatar is not None:
            group.avatar = avatar
            update_fields.append("avatar")

        if update_fields:
            group.save(update_fields=[*update_fields, "updated_at"])
            cls.get_logger().info(
                f"User {actor.pk} updated group {group.pk}: {', '.join(update_fields)}"
            )
        return ServiceResult.success(group)

    @classmethod
    def add_members(
        cls,
        actor: User,
        group_id: int,
        member_ids: Iterable[int],
    ) -> ServiceResult[Group]:
        """Add users to a group; ids already in the group are ignored."""
        member_ids = list(member_ids or [])
        if not member_ids:
            return ServiceResult.failure(
                "Member IDs array is required",
                error_code="VALIDATION_ERROR",
                kind=ErrorKind.VALIDATION,
                errors={"memberIds": ["Provide at least one user id."]},
            )

        group = cls._load(group_id)
        if group is None:
            return _group_not_found()

        capabilities = GroupAuthorizationService.capabilities_for(actor, group)
        if not capabilities.can_manage_members:
            return GroupAuthorizationService.deny_management("add members to")

        users, missing = cls._resolve_users(member_ids)
        if missing:
            return ServiceResult.failure(
                "Some users were not found",
                error_code="MEMBERS_NOT_FOUND",
                kind=ErrorKind.NOT_FOUND,
                errors={"memberIds": [f"Unknown user id {pk}" for pk in missing]},
            )

        existing = set(group.members.values_list("pk", flat=True))
        new_members = [user for user in users if user.pk not in existing]
        if new_members:
            group.members.add(*new_members)

        cls.get_logger().info(
            f"User {actor.pk} added {len(new_members)} members to group {group.pk}"
        )
        return ServiceResult.success(group)

    @classmethod
    def remove_member(
        cls,
        actor: User,
        group_id: int,
        member_id: int,
    ) -> ServiceResult[Group]:
        """
        Remove a member (and their admin status).

        The group row is locked for the check-then-write so two concurrent
        removals cannot leave the group without admins.

        Error codes:
            MEMBER_NOT_FOUND: user is not in the group
            LAST_ADMIN: member is the only admin
            CANNOT_REMOVE_CREATOR: member created the group
        """
        with cls.atomic():
            group = cls._load(group_id, for_update=True)
            if group is None:
                return _group_not_found()

            capabilities = GroupAuthorizationService.capabilities_for(actor, group)
            if not capabilities.can_manage_members:
                return GroupAuthorizationService.deny_management("remove members from")

            if not group.members.filter(pk=member_id).exists():
                return ServiceResult.failure(
                    "User is not a member of this group",
                    error_code="MEMBER_NOT_FOUND",
                    kind=ErrorKind.NOT_FOUND,
                )

            admin_ids = set(group.admins.values_list("pk", flat=True))
            if admin_ids == {member_id}:
                return ServiceResult.failure(
                    "Cannot remove the last admin from the group",
                    error_code="LAST_ADMIN",
                    kind=ErrorKind.CONSTRAINT_VIOLATION,
                )

            if group.created_by_id == member_id:
                return ServiceResult.failure(
                    "Cannot remove the group creator",
                    error_code="CANNOT_REMOVE_CREATOR",
                    kind=ErrorKind.CONSTRAINT_VIOLATION,
                )

            group.members.remove(member_id)
            if member_id in admin_ids:
                group.admins.remove(member_id)

        cls.get_logger().info(
            f"User {actor.pk} removed user {member_id} from group {group.pk}"
        )
        return ServiceResult.success(group)

    @classmethod
    def delete_group(cls, actor: User, group_id: int) -> ServiceResult[None]:
        """Delete a group and all its messages in one transaction."""
        group = cls._load(group_id)
        if group is None:
            return _group_not_found()

        capabilities = GroupAuthorizationService.capabilities_for(actor, group)
        if not capabilities.can_delete:
            return GroupAuthorizationService.deny_management("delete")

        with cls.atomic():
            deleted_messages, _ = Message.objects.filter(group=group).delete()
            group.delete()

        cls.get_logger().info(
            f"User {actor.pk} deleted group {group_id} ({deleted_messages} rows removed)"
        )
        return ServiceResult.success(None)


@dataclass
class IntegrityProblem:
    """One inconsistency found by ChatIntegrityService.scan()."""

    code: str
    object_id: int
    detail: str


class ChatIntegrityService(BaseService):
    """
    Detect chat state that the write paths should never produce.

    Checks:
        GROUP_WITHOUT_ADMINS: group has an empty admin set
        ADMIN_NOT_MEMBER: an admin is missing from members
        CREATOR_NOT_MEMBER: the creator is missing from members
        INVALID_MESSAGE_TARGET: message has both or neither of receiver/group
    """

    @classmethod
    def scan(cls) -> list[IntegrityProblem]:
        problems = []

        for group in Group.objects.prefetch_related("members", "admins"):
            member_ids = {user.pk for user in group.members.all()}
            admin_ids = {user.pk for user in group.admins.all()}

            if not admin_ids:
                problems.append(
                    IntegrityProblem("GROUP_WITHOUT_ADMINS", group.pk, "Group has no admins")
                )
            for admin_id in sorted(admin_ids - member_ids):
                problems.append(
                    IntegrityProblem(
                        "ADMIN_NOT_MEMBER",
                        group.pk,
                        f"Admin {admin_id} is not a member",
                    )
                )
            if group.created_by_id not in member_ids:
                problems.append(
                    IntegrityProblem(
                        "CREATOR_NOT_MEMBER",
                        group.pk,
                        f"Creator {group.created_by_id} is not a member",
                    )
                )

        bad_targets = Message.objects.filter(
            Q(receiver__isnull=True, group__isnull=True)
            | Q(receiver__isnull=False, group__isnull=False)
        ).values_list("pk", flat=True)
        for message_id in bad_targets:
            problems.append(
                IntegrityProblem(
                    "INVALID_MESSAGE_TARGET",
                    message_id,
                    "Message must target exactly one of receiver or group",
                )
            )

        if problems:
            cls.get_logger().warning(f"Chat integrity scan found {len(problems)} problems")
        return problems
