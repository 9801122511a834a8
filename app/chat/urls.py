"""
URL configuration for chat API.

URL Structure:
    /conversations/                          GET
    /conversations/{user_id}/read/           POST
    /messages/                               POST
    /messages/{user_id}/                     GET
    /groups/                                 GET, POST
    /groups/{id}/                            PUT, DELETE
    /groups/{id}/messages/                   GET, POST
    /groups/{id}/members/                    POST
    /groups/{id}/members/{member_id}/        DELETE

All URLs are prefixed with /api/v1/ in the main URL configuration.
"""

from django.urls import path

from chat.views import (
    ConversationListView,
    ConversationReadView,
    DirectMessageCreateView,
    DirectMessageListView,
    GroupDetailView,
    GroupListCreateView,
    GroupMemberDetailView,
    GroupMembersView,
    GroupMessagesView,
)

app_name = "chat"

urlpatterns = [
    path("conversations/", ConversationListView.as_view(), name="conversation-list"),
    path(
        "conversations/<int:user_id>/read/",
        ConversationReadView.as_view(),
        name="conversation-read",
    ),
    path("messages/", DirectMessageCreateView.as_view(), name="message-create"),
    path("messages/<int:user_id>/", DirectMessageListView.as_view(), name="message-list"),
    path("groups/", GroupListCreateView.as_view(), name="group-list"),
    path("groups/<int:group_id>/", GroupDetailView.as_view(), name="group-detail"),
    path(
        "groups/<int:group_id>/messages/",
        GroupMessagesView.as_view(),
        name="group-messages",
    ),
    path(
        "groups/<int:group_id>/members/",
        GroupMembersView.as_view(),
        name="group-members",
    ),
    path(
        "groups/<int:group_id>/members/<int:member_id>/",
        GroupMemberDetailView.as_view(),
        name="group-member-detail",
    ),
]
