"""Exceptions raised by the API layer."""


class AirthingsError(Exception):
    """Base exception for Airthings API access."""

    pass


class ApiError(AirthingsError):
    """Transport, HTTP status or decoding failure on a data endpoint."""

    def __init__(self, status: int, message: str):
        self.status = status
        self.message = message
        if status:
            super().__init__(f"API error {status}: {message}")
        else:
            super().__init__(f"API request failed: {message}")


class AuthError(AirthingsError):
    """Access token could not be obtained."""

    pass
