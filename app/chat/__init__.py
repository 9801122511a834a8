"""
Chat app for direct and group messaging.

This app handles:
- Direct threads between two users (no container row)
- Groups and their membership
- Message history with cursor pagination
- Read state per reader

Related apps:
    - authentication: User model and roles
    - organizations: Opportunity mentors (group management rights)

Clients poll the REST endpoints; there is no push channel here.

Usage:
    from chat.services import MessageService

    result = MessageService.send_direct_message(
        sender=org_user,
        receiver_id=volunteer.pk,
        content="Hello!",
    )
"""
