"""
Factory Boy factories for authentication models.

Usage:
    from authentication.tests.factories import UserFactory

    # Unverified volunteer with a password
    user = UserFactory()

    # Verified organization account
    org = UserFactory(role=UserRole.ORGANIZATION, email_verified=True)

    # Externally provisioned account (no usable password)
    user = UserFactory(password=None)
"""

import factory

from authentication.models import User, UserRole


class UserFactory(factory.django.DjangoModelFactory):
    """
    Factory for User model.

    Creates volunteers by default, unverified and active. Pass role=None
    for a user who has not chosen a role yet.
    """

    class Meta:
        model = User
        skip_postgeneration_save = True

    email = factory.Sequence(lambda n: f"user{n}@example.com")
    name = factory.Sequence(lambda n: f"User {n}")
    role = UserRole.VOLUNTEER
    email_verified = False
    is_active = True
    is_staff = False

    @classmethod
    def _create(cls, model_class, *args, **kwargs):
        """Override create to use UserManager.create_user()."""
        password = kwargs.pop("password", "TestPass123!")
        return model_class.objects.create_user(
            email=kwargs.pop("email"), password=password, **kwargs
        )
