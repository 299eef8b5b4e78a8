"""
Factory Boy factories for accounts models.

Provides realistic test data generation for:
- User: Email-based account, verified by default
- RefreshToken: Stored refresh token row (hash of a known raw token)

Usage:
    from accounts.tests.factories import UserFactory, RefreshTokenFactory

    # Verified user (email confirmed, account completed)
    user = UserFactory()

    # Verified user owning a shortname
    user = UserFactory(shortname="ada_l")

    # Registered user who hasn't confirmed the email yet
    user = UserFactory(unconfirmed=True)

    # Confirmed email, account not completed
    user = UserFactory(unverified=True)
"""

from datetime import timedelta

import factory
from django.utils import timezone

from accounts.models import RefreshToken, User
from core.helpers import hash_string
from mentions.models import UserMention

DEFAULT_PASSWORD = "TestPass123"


class UserFactory(factory.django.DjangoModelFactory):
    """
    Factory for User model.

    Users are created through UserManager.create_user(), so the password
    is hashed. Unlike a freshly registered account, the default user has
    a confirmed email and a completed account, which is what most chat
    operations require.

    Examples:
        user = UserFactory()
        user = UserFactory(unconfirmed=True)
        user = UserFactory(is_deleted=True)
        user = UserFactory(shortname="group_admin")
    """

    class Meta:
        model = User
        skip_postgeneration_save = True

    class Params:
        unconfirmed = factory.Trait(email_confirmed=False, is_verified=False)
        unverified = factory.Trait(email_confirmed=True, is_verified=False)

    email = factory.Sequence(lambda n: f"user{n}@gmail.com")
    firstname = factory.Faker("first_name")
    lastname = factory.Faker("last_name")
    bio = ""
    email_confirmed = True
    is_verified = True
    is_active = True

    @factory.post_generation
    def shortname(self, create, extracted, **kwargs):
        """Bind ``extracted`` as the user's shortname."""
        if create and extracted:
            UserMention.objects.create(user=self, shortname=extracted)

    @classmethod
    def _create(cls, model_class, *args, **kwargs):
        """Override create to use UserManager.create_user()."""
        password = kwargs.pop("password", DEFAULT_PASSWORD)
        return model_class.objects.create_user(
            email=kwargs.pop("email"), password=password, **kwargs
        )


class PendingConfirmationUserFactory(UserFactory):
    """
    Registered user with a live confirmation code.

    Examples:
        user = PendingConfirmationUserFactory(email_confirmation_token="A1B2C3")
    """

    email_confirmed = False
    is_verified = False
    email_confirmation_token = "A1B2C3"
    email_confirmation_token_expiry = factory.LazyFunction(
        lambda: timezone.now() + timedelta(minutes=5)
    )


class RefreshTokenFactory(factory.django.DjangoModelFactory):
    """
    Factory for RefreshToken model.

    The raw token is a factory parameter; only its hash is stored. Keep
    the raw value around to present it to the handlers.

    Examples:
        token = RefreshTokenFactory(user=user, raw_token="raw-value")
        expired = RefreshTokenFactory(user=user, expired=True)
    """

    class Meta:
        model = RefreshToken

    class Params:
        raw_token = factory.Sequence(lambda n: f"refresh-token-{n}")
        expired = factory.Trait(
            expires_at=factory.LazyFunction(lambda: timezone.now() - timedelta(minutes=1))
        )
        revoked = factory.Trait(
            is_revoked=True,
            revoked_at=factory.LazyFunction(timezone.now),
        )

    user = factory.SubFactory(UserFactory)
    token_hash = factory.LazyAttribute(lambda o: hash_string(o.raw_token))
    expires_at = factory.LazyFunction(lambda: timezone.now() + timedelta(days=6))
