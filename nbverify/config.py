"""Run options, field schema and credential lookup."""

import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from .hints import HINT_MODES

CREDENTIAL_NAME = "neverBounceApi"
API_KEY_ENV = "NEVERBOUNCE_API_KEY"

DEFAULT_EMAIL_FIELD = "Email"
DEFAULT_OUTPUT_FIELD = "verification_result"
DEFAULT_TIMEOUT = 30


@dataclass(frozen=True)
class FieldSpec:
    name: str
    display_name: str
    type: str
    default: Any
    description: str = ""
    required: bool = False
    options: Tuple[Any, ...] = ()


# Declarative description of the node's fields; additional fields are optional.
FIELDS: Tuple[FieldSpec, ...] = (
    FieldSpec(
        "emailField",
        "Email Field",
        "string",
        DEFAULT_EMAIL_FIELD,
        "The name of the field that contains the email address",
        required=True,
    ),
)

ADDITIONAL_FIELDS: Tuple[FieldSpec, ...] = (
    FieldSpec(
        "includeHints",
        "Include Hints",
        "boolean",
        False,
        "Whether to include agent instructions and hints in the response",
    ),
    FieldSpec(
        "hintMode",
        "Hint Mode",
        "options",
        "fixed",
        "Content-safety rules (fixed) or a random sending-cadence tip (random)",
        options=HINT_MODES,
    ),
    FieldSpec(
        "outputField",
        "Output Field Name",
        "string",
        DEFAULT_OUTPUT_FIELD,
        "The name of the field to store the verification results",
    ),
    FieldSpec(
        "timeout",
        "Timeout",
        "number",
        DEFAULT_TIMEOUT,
        "Timeout in seconds for the API request",
    ),
)


@dataclass
class VerifyOptions:
    email_field: str = DEFAULT_EMAIL_FIELD
    output_field: str = DEFAULT_OUTPUT_FIELD
    timeout: float = DEFAULT_TIMEOUT
    include_hints: bool = False
    hint_mode: str = "fixed"

    def __post_init__(self) -> None:
        if not self.email_field:
            raise ValueError("emailField is required")
        if not self.output_field:
            self.output_field = DEFAULT_OUTPUT_FIELD
        if self.hint_mode not in HINT_MODES:
            raise ValueError(f"Unknown hint mode: {self.hint_mode!r}")
        if self.timeout is None or self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout!r}")

    @classmethod
    def from_parameters(cls, params: Mapping[str, Any]) -> "VerifyOptions":
        """Build options from host-style node parameters."""
        extra = params.get("additionalFields") or {}
        return cls(
            email_field=params.get("emailField", DEFAULT_EMAIL_FIELD),
            output_field=extra.get("outputField") or DEFAULT_OUTPUT_FIELD,
            timeout=extra.get("timeout", DEFAULT_TIMEOUT),
            include_hints=bool(extra.get("includeHints", False)),
            hint_mode=extra.get("hintMode", "fixed"),
        )


def get_api_key(env: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """Read the NeverBounce API key from the environment."""
    env = os.environ if env is None else env
    return env.get(API_KEY_ENV) or None
