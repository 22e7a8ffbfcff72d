"""NeverBounce email verification for workflow records."""

from .errors import (
    CredentialError,
    InvalidFormatError,
    ItemError,
    MissingFieldError,
    UpstreamError,
    VerificationError,
)
from .models import ItemResult, VerificationResult, VerifyStatus
from .pipeline import verify_items

__all__ = [
    "CredentialError",
    "InvalidFormatError",
    "ItemError",
    "ItemResult",
    "MissingFieldError",
    "UpstreamError",
    "VerificationError",
    "VerificationResult",
    "VerifyStatus",
    "verify_items",
]
