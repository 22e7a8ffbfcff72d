"""Shared data models for NeverBounce verification."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class VerifyStatus(str, Enum):
    VALID = "valid"
    INVALID = "invalid"
    DISPOSABLE = "disposable"
    CATCHALL = "catchall"
    UNKNOWN = "unknown"


@dataclass
class VerificationResult:
    valid: bool
    status: Optional[str]  # upstream "result" sentinel
    status_code: Any  # upstream "status"
    flags: List[str]
    suggested_correction: Optional[str]
    raw_response: Dict[str, Any]
    agent_instructions: Optional[str] = None

    @classmethod
    def from_response(cls, data: Dict[str, Any]) -> "VerificationResult":
        """Build a result from a /v4/single/check response body."""
        result = data.get("result")
        return cls(
            valid=result == VerifyStatus.VALID.value,
            status=result,
            status_code=data.get("status"),
            flags=list(data.get("flags") or []),
            suggested_correction=data.get("suggested_correction") or None,
            raw_response=data,
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "valid": self.valid,
            "status": self.status,
            "status_code": self.status_code,
            "flags": list(self.flags),
            "suggested_correction": self.suggested_correction,
            "raw_response": self.raw_response,
        }
        # only present when hints were requested
        if self.agent_instructions is not None:
            out["agent_instructions"] = self.agent_instructions
        return out


@dataclass
class ItemResult:
    json: Dict[str, Any]
    paired_item: int  # index of the originating input record
    error: Optional[Exception] = field(default=None, repr=False, compare=False)

    @property
    def failed(self) -> bool:
        return self.error is not None

    def to_dict(self) -> Dict[str, Any]:
        """Host-shaped execution data."""
        return {"json": self.json, "pairedItem": {"item": self.paired_item}}
