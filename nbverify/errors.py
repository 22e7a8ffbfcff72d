"""Error taxonomy for the verification pipeline."""

from typing import Optional


class VerificationError(Exception):
    """A single record could not be verified."""

    def __init__(self, message: str, item_index: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.item_index = item_index


class MissingFieldError(VerificationError):
    def __init__(self, field_name: str, item_index: Optional[int] = None):
        super().__init__(f'No email found in field "{field_name}"', item_index)
        self.field_name = field_name


class InvalidFormatError(VerificationError):
    def __init__(
        self,
        field_name: str,
        value: str,
        reason: Optional[str] = None,
        item_index: Optional[int] = None,
    ):
        super().__init__(
            f'Invalid email format in field "{field_name}": {value}', item_index
        )
        self.field_name = field_name
        self.value = value
        self.reason = reason  # validator detail


class UpstreamError(VerificationError):
    """NeverBounce was unreachable or answered with a failure."""


class CredentialError(UpstreamError):
    """The API key is missing or was rejected."""


class ItemError(Exception):
    """Aborts a fail-fast run; wraps the error of the failing record."""

    def __init__(self, cause: Exception, item_index: int):
        super().__init__(str(cause))
        self.cause = cause
        self.item_index = item_index

    def __str__(self) -> str:
        return f"{self.cause} [item {self.item_index}]"
