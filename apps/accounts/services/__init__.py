"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    UserRegistrationError,
    InvalidCredentialsError,
    InactiveAccountError,
    InvalidTokenError,
    UserNotFoundError,
    ReauthenticationRequiredError,
)
from .user_registration import register_user
from .user_authentication import authenticate_user
from .session_directory import (
    SessionUserDetails,
    get_session_user_details,
    save_device_token,
    logout_user,
    get_user_details,
)
from .password_reset import request_password_reset, confirm_password_reset
from .account_management import delete_user_account, requires_reauthentication

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'UserRegistrationError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'InvalidTokenError',
    'UserNotFoundError',
    'ReauthenticationRequiredError',
    # Services
    'register_user',
    'authenticate_user',
    'SessionUserDetails',
    'get_session_user_details',
    'save_device_token',
    'logout_user',
    'get_user_details',
    'request_password_reset',
    'confirm_password_reset',
    'delete_user_account',
    'requires_reauthentication',
]
