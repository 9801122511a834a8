"""
Chat API views.

Thin HTTP layer over chat.services: parse the body, call a service, render
the result. Failures are rendered by ServiceResponseMixin.

Endpoints:
    Direct threads:
        GET  /api/v1/conversations/                  ConversationListView
        POST /api/v1/conversations/{user_id}/read/   ConversationReadView
        POST /api/v1/messages/                       DirectMessageCreateView
        GET  /api/v1/messages/{user_id}/             DirectMessageListView

    Groups:
        GET, POST    /api/v1/groups/                         GroupListCreateView
        PUT, DELETE  /api/v1/groups/{id}/                    GroupDetailView
        GET, POST    /api/v1/groups/{id}/messages/           GroupMessagesView
        POST         /api/v1/groups/{id}/members/            GroupMembersView
        DELETE       /api/v1/groups/{id}/members/{user_id}/  GroupMemberDetailView

Related files:
    - services.py: Business logic
    - serializers.py: Request/response shapes
    - urls.py: URL routing
"""

from __future__ import annotations

from drf_spectacular.utils import (
    OpenApiExample,
    OpenApiParameter,
    OpenApiResponse,
    extend_schema,
)
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from chat.serializers import (
    ConversationSerializer,
    DeleteGroupResponseSerializer,
    DirectMessageCreateSerializer,
    GroupCreateSerializer,
    GroupListItemSerializer,
    GroupMembersSerializer,
    GroupMessageCreateSerializer,
    GroupSerializer,
    GroupUpdateSerializer,
    MarkReadResponseSerializer,
    MessagePageSerializer,
    MessageSerializer,
    media_descriptor,
)
from chat.services import (
    ConversationService,
    GroupService,
    MessageService,
    ReadStateService,
)
from core.viewset_mixins import ServiceResponseMixin

PAGE_PARAMETERS = [
    OpenApiParameter("limit", int, description="Page size (default 20, max 100)"),
    OpenApiParameter("cursor", int, description="nextCursor from the previous page"),
]


# =============================================================================
# Direct threads
# =============================================================================


class ConversationListView(ServiceResponseMixin, APIView):
    """
    GET: List the caller's direct threads, most recent first.

    URL: /api/v1/conversations/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="List conversations",
        description=(
            "One entry per counterparty with the latest message and the number "
            "of unread messages sent to the caller."
        ),
        responses={200: ConversationSerializer(many=True)},
    )
    def get(self, request):
        result = ConversationService.list_conversations(request.user)
        if not result.success:
            return self.failure_response(result)
        return Response(ConversationSerializer(result.data, many=True).data)


class ConversationReadView(ServiceResponseMixin, APIView):
    """
    POST: Mark every message from the counterparty as read.

    URL: /api/v1/conversations/{user_id}/read/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Mark conversation read",
        request=None,
        responses={
            200: MarkReadResponseSerializer,
            404: OpenApiResponse(description="Counterparty not found"),
        },
    )
    def post(self, request, user_id):
        result = ReadStateService.mark_conversation_read(request.user, user_id)
        if not result.success:
            return self.failure_response(result)
        return Response({"success": True, "updatedCount": result.data})


class DirectMessageListView(ServiceResponseMixin, APIView):
    """
    GET: One page of the direct thread with a user.

    Fetching marks the counterparty's messages as read.

    URL: /api/v1/messages/{user_id}/?limit=&cursor=
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Get direct messages",
        parameters=PAGE_PARAMETERS,
        responses={
            200: MessagePageSerializer,
            400: OpenApiResponse(description="Malformed cursor"),
            404: OpenApiResponse(description="Counterparty not found"),
        },
    )
    def get(self, request, user_id):
        result = MessageService.get_direct_messages(
            request.user,
            user_id,
            limit=request.query_params.get("limit"),
            cursor=request.query_params.get("cursor"),
        )
        if not result.success:
            return self.failure_response(result)
        return Response(MessagePageSerializer(result.data).data)


class DirectMessageCreateView(ServiceResponseMixin, APIView):
    """
    POST: Send a direct message.

    URL: /api/v1/messages/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Send direct message",
        description=(
            "Content or media is required. Starting a new thread is limited to "
            "organizations, admins and mentors; replies are open to everyone."
        ),
        request=DirectMessageCreateSerializer,
        responses={
            201: MessageSerializer,
            400: OpenApiResponse(description="Missing receiver or content"),
            403: OpenApiResponse(description="Not allowed to start a conversation"),
            404: OpenApiResponse(description="Receiver not found"),
        },
        examples=[
            OpenApiExample(
                "Text message",
                value={"receiverId": 42, "content": "See you Saturday!"},
                request_only=True,
            ),
            OpenApiExample(
                "Image message",
                value={
                    "receiverId": 42,
                    "media": {
                        "url": "https://cdn.example.com/uploads/photo.jpg",
                        "kind": "image",
                        "mimeType": "image/jpeg",
                    },
                },
                request_only=True,
            ),
        ],
    )
    def post(self, request):
        serializer = DirectMessageCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = MessageService.send_direct_message(
            request.user,
            receiver_id=data["receiverId"],
            content=data["content"],
            media=media_descriptor(data["media"]),
        )
        if not result.success:
            return self.failure_response(result)
        return Response(MessageSerializer(result.data).data, status=status.HTTP_201_CREATED)


# =============================================================================
# Groups
# =============================================================================


class GroupListCreateView(ServiceResponseMixin, APIView):
    """
    GET: Groups the caller belongs to.
    POST: Create a group.

    URL: /api/v1/groups/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="List groups",
        responses={200: GroupListItemSerializer(many=True)},
    )
    def get(self, request):
        result = GroupService.list_groups(request.user)
        if not result.success:
            return self.failure_response(result)
        return Response(GroupListItemSerializer(result.data, many=True).data)

    @extend_schema(
        summary="Create group",
        description=(
            "Allowed for admins, organizations and opportunity mentors. "
            "Organization groups are admin-only. Invited mentors of the "
            "opportunity become group admins."
        ),
        request=GroupCreateSerializer,
        responses={
            201: GroupSerializer,
            403: OpenApiResponse(description="Role or mentorship requirement not met"),
            404: OpenApiResponse(description="Unknown member id"),
        },
    )
    def post(self, request):
        serializer = GroupCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = GroupService.create_group(
            request.user,
            name=data["name"],
            member_ids=data["memberIds"],
            description=data["description"],
            is_organization_group=data["isOrganizationGroup"],
            opportunity_id=data["opportunityId"],
            avatar=data["avatar"],
        )
        if not result.success:
            return self.failure_response(result)
        return Response(GroupSerializer(result.data).data, status=status.HTTP_201_CREATED)


class GroupDetailView(ServiceResponseMixin, APIView):
    """
    PUT: Update name/description/avatar.
    DELETE: Delete the group and its messages.

    URL: /api/v1/groups/{group_id}/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Update group",
        request=GroupUpdateSerializer,
        responses={
            200: GroupSerializer,
            403: OpenApiResponse(description="Not allowed to manage this group"),
            404: OpenApiResponse(description="Group not found"),
        },
    )
    def put(self, request, group_id):
        serializer = GroupUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = GroupService.update_group(
            request.user,
            group_id,
            name=data.get("name"),
            description=data.get("description"),
            avatar=data.get("avatar"),
        )
        if not result.success:
            return self.failure_response(result)
        return Response(GroupSerializer(result.data).data)

    @extend_schema(
        summary="Delete group",
        responses={
            200: DeleteGroupResponseSerializer,
            403: OpenApiResponse(description="Not allowed to manage this group"),
            404: OpenApiResponse(description="Group not found"),
        },
    )
    def delete(self, request, group_id):
        result = GroupService.delete_group(request.user, group_id)
        if not result.success:
            return self.failure_response(result)
        return Response({"success": True, "message": "Group deleted successfully"})


class GroupMessagesView(ServiceResponseMixin, APIView):
    """
    GET: One page of a group thread (marks it read for the caller).
    POST: Post to the group.

    URL: /api/v1/groups/{group_id}/messages/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Get group messages",
        parameters=PAGE_PARAMETERS,
        responses={
            200: MessagePageSerializer,
            403: OpenApiResponse(description="Not a member"),
            404: OpenApiResponse(description="Group not found"),
        },
    )
    def get(self, request, group_id):
        result = MessageService.get_group_messages(
            request.user,
            group_id,
            limit=request.query_params.get("limit"),
            cursor=request.query_params.get("cursor"),
        )
        if not result.success:
            return self.failure_response(result)
        return Response(MessagePageSerializer(result.data).data)

    @extend_schema(
        summary="Send group message",
        request=GroupMessageCreateSerializer,
        responses={
            201: MessageSerializer,
            400: OpenApiResponse(description="Content or media is required"),
            403: OpenApiResponse(description="Not a member"),
            404: OpenApiResponse(description="Group not found"),
        },
    )
    def post(self, request, group_id):
        serializer = GroupMessageCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = MessageService.send_group_message(
            request.user,
            group_id,
            content=data["content"],
            media=media_descriptor(data["media"]),
        )
        if not result.success:
            return self.failure_response(result)
        return Response(MessageSerializer(result.data).data, status=status.HTTP_201_CREATED)


class GroupMembersView(ServiceResponseMixin, APIView):
    """
    POST: Add members.

    URL: /api/v1/groups/{group_id}/members/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Add group members",
        request=GroupMembersSerializer,
        responses={200: GroupSerializer},
    )
    def post(self, request, group_id):
        serializer = GroupMembersSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = GroupService.add_members(
            request.user, group_id, serializer.validated_data["memberIds"]
        )
        if not result.success:
            return self.failure_response(result)
        return Response(GroupSerializer(result.data).data)


class GroupMemberDetailView(ServiceResponseMixin, APIView):
    """
    DELETE: Remove a member.

    URL: /api/v1/groups/{group_id}/members/{member_id}/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Remove group member",
        responses={
            200: GroupSerializer,
            409: OpenApiResponse(description="Member is the last admin or the creator"),
        },
    )
    def delete(self, request, group_id, member_id):
        result = GroupService.remove_member(request.user, group_id, member_id)
        if not result.success:
            return self.failure_response(result)
        return Response(GroupSerializer(result.data).data)
