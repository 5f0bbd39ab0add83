"""User authentication service (sign-in / sign-out)."""

import logging
from typing import Optional

from django.db import transaction
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from .exceptions import InvalidCredentialsError, InactiveAccountError, InvalidTokenError

User = get_user_model()

logger = logging.getLogger(__name__)


@transaction.atomic
def authenticate_user(*, email: str, password: str) -> User:
    """
    Authenticate user with email and password.

    Uses select_for_update() to prevent race conditions when updating last_login.

    Args:
        email: User's email
        password: User's password

    Returns:
        Authenticated User instance

    Raises:
        InvalidCredentialsError: If credentials are invalid
        InactiveAccountError: If account is deactivated
    """
    try:
        user = (
            User.objects
            .select_for_update()
            .get(email__iexact=email)
        )
    except User.DoesNotExist:
        logger.info("Sign-in rejected: unknown email")
        raise InvalidCredentialsError("Invalid email or password")

    if not user.check_password(password):
        logger.info("Sign-in rejected: bad password for user %s", user.id)
        raise InvalidCredentialsError("Invalid email or password")

    if not user.is_active:
        raise InactiveAccountError("Account is deactivated")

    user.last_login = timezone.now()
    user.save(update_fields=['last_login'])

    return user


def issue_tokens(user: User) -> dict:
    """Return a fresh refresh/access token pair for the user."""
    refresh = RefreshToken.for_user(user)
    return {
        'refresh': str(refresh),
        'access': str(refresh.access_token),
    }


def sign_out_user(*, user: User, refresh_token: Optional[str] = None) -> None:
    """
    End the user's session.

    JWTs are stateless, so signing out only validates the refresh token the
    client is discarding. The client is responsible for dropping both tokens.

    Raises:
        InvalidTokenError: If a refresh token is given but is malformed or expired
    """
    if refresh_token:
        try:
            RefreshToken(refresh_token)
        except TokenError as e:
            raise InvalidTokenError(str(e))

    logger.info("User %s signed out", user.id)
