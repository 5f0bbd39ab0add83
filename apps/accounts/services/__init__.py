"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    InvalidCredentialsError,
    InactiveAccountError,
    InvalidTokenError,
)
from .user_authentication import authenticate_user, sign_out_user

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'InvalidTokenError',
    # Services
    'authenticate_user',
    'sign_out_user',
]
