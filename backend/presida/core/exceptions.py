"""Shared exceptions module."""

from typing import Optional


class PresidaException(Exception):
    """Base exception for Presida services."""

    pass


class NotFoundException(PresidaException):
    """Exception raised when an object is not found."""

    def __init__(self, message: Optional[str] = "Object not found"):
        """Create a new NotFoundException instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        self.message = message
        super().__init__(self.message)


class InvalidStateError(PresidaException):
    """Exception raised when an operation is not valid for the current state."""

    def __init__(self, message: Optional[str] = "Object is not in a valid state"):
        """Create a new InvalidStateError instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        self.message = message
        super().__init__(self.message)


class ExternalServiceError(PresidaException):
    """Exception raised when an upstream provider call fails."""

    def __init__(self, service_name: str, message: Optional[str] = "External service failed"):
        """Create a new ExternalServiceError instance.

        Args:
        ----
            service_name (str): Name of the upstream service.
            message (str, optional): The error message. Has default message.

        """
        self.service_name = service_name
        self.message = message
        super().__init__(self.message)
