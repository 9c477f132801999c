"""
Exceptions raised by the service layer
"""


class IntegrationError(Exception):
    """Base class for integration service errors"""


class IntegrationValidationError(IntegrationError):
    """A request is missing a required field; nothing was persisted"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
