"""
Airthings cloud API access: data endpoints and token acquisition.
"""

from .auth import ClientCredentialsTokenSource, TokenSource
from .client import AirthingsClient
from .exceptions import AirthingsError, ApiError, AuthError

__all__ = [
    "AirthingsClient",
    "TokenSource",
    "ClientCredentialsTokenSource",
    "AirthingsError",
    "ApiError",
    "AuthError",
]
