"""User records keyed by id and by email."""

import logging
from typing import TYPE_CHECKING, final

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction

from server.apps.core.exceptions import ConflictError, ValidationError

if TYPE_CHECKING:
    from django.contrib.auth.models import User

logger = logging.getLogger(__name__)


@final
class UserDirectory:
    """Lookup, registration and password verification of users.

    Passwords are only ever stored as the digest produced by Django's
    configured password hasher.
    """

    def get_by_id(self, user_id: int) -> 'User | None':
        """Get a user by id.

        Args:
            user_id: User primary key.

        Returns:
            User if found, None otherwise.
        """
        return get_user_model().objects.filter(pk=user_id).first()

    def get_by_email(self, email: str) -> 'User | None':
        """Get a user by email.

        Args:
            email: Email address.

        Returns:
            User if found, None otherwise.
        """
        return get_user_model().objects.filter(username=email).first()

    def verify_credentials(self, email: str, password: str) -> 'User | None':
        """Check an email and password pair.

        Args:
            email: Email address.
            password: Clear text password supplied by the client.

        Returns:
            The user when the password matches its digest, None otherwise.
        """
        user = self.get_by_email(email)
        if user is None:
            # Hash anyway so unknown emails take as long as bad passwords
            get_user_model()().set_password(password)
            logger.warning('Login attempt for unknown email: %s', email)
            return None

        if not user.check_password(password):
            logger.warning('Invalid password for user: %s', email)
            return None

        return user

    def register(self, email: object, password: object) -> 'User':
        """Create a user.

        Args:
            email: Email address from the request body.
            password: Clear text password from the request body.

        Returns:
            Created user.

        Raises:
            ValidationError: If email or password is missing.
            ConflictError: If a user with this email already exists.
        """
        if not email or not isinstance(email, str):
            raise ValidationError('Missing email')
        if not password or not isinstance(password, str):
            raise ValidationError('Missing password')

        if get_user_model().objects.filter(username=email).exists():
            raise ConflictError('Already exist')

        try:
            with transaction.atomic():
                user = get_user_model().objects.create_user(
                    username=email,
                    email=email,
                    password=password,
                )
        except IntegrityError as error:
            # Concurrent signup with the same email
            raise ConflictError('Already exist') from error

        logger.info('User registered: %s (ID: %d)', email, user.pk)
        return user

    def count(self) -> int:
        """Count registered users.

        Returns:
            Number of users.
        """
        return get_user_model().objects.count()
