"""Per-record verification pipeline.

Records are processed one at a time, in input order. Each syntactically
valid address costs exactly one call to NeverBounce; nothing is shared
between records apart from the read-only API key.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .client import check_email
from .config import VerifyOptions
from .errors import InvalidFormatError, ItemError, MissingFieldError, VerificationError
from .hints import HintPicker, get_hint_picker
from .models import ItemResult, VerificationResult
from .syntax import normalize_email

logger = logging.getLogger(__name__)


def extract_email(record: Mapping[str, Any], field_name: str) -> str:
    """Return the address stored under ``field_name`` or raise."""
    value = record.get(field_name)
    if value is None or value == "":
        raise MissingFieldError(field_name)
    email = str(value)
    valid, _, _, notes = normalize_email(email)
    if not valid:
        raise InvalidFormatError(field_name, email, reason=notes[0] if notes else None)
    return email


def verify_record(
    record: Mapping[str, Any],
    api_key: Optional[str],
    options: VerifyOptions,
    hint_picker: Optional[HintPicker] = None,
) -> Dict[str, Any]:
    """Verify one record; return a shallow copy with the result attached."""
    email = extract_email(record, options.email_field)
    response = check_email(email, api_key, timeout=options.timeout)

    result = VerificationResult.from_response(response)
    if options.include_hints:
        picker = hint_picker or get_hint_picker(options.hint_mode)
        result.agent_instructions = picker()

    out = dict(record)
    out[options.output_field] = result.to_dict()
    out["email_verified"] = True
    out["verification_timestamp"] = datetime.now(timezone.utc).isoformat()
    return out


def verify_items(
    items: Sequence[Mapping[str, Any]],
    api_key: Optional[str],
    options: Optional[VerifyOptions] = None,
    continue_on_fail: bool = False,
    hint_picker: Optional[HintPicker] = None,
) -> List[ItemResult]:
    """Verify every record in order.

    With ``continue_on_fail`` a failing record becomes ``{"error": message}``
    and processing goes on; otherwise the first failure raises ``ItemError``
    and nothing is returned.
    """
    options = options or VerifyOptions()
    if options.include_hints and hint_picker is None:
        hint_picker = get_hint_picker(options.hint_mode)

    results: List[ItemResult] = []
    for i, record in enumerate(items):
        try:
            data = verify_record(record, api_key, options, hint_picker)
        except VerificationError as e:
            e.item_index = i
            if not continue_on_fail:
                logger.error("Verification aborted at item %d: %s", i, e)
                raise ItemError(e, i) from e
            logger.warning("Item %d failed: %s", i, e)
            if isinstance(e, InvalidFormatError) and e.reason:
                logger.debug("Item %d: %s", i, e.reason)
            results.append(ItemResult({"error": e.message}, i, error=e))
            continue
        results.append(ItemResult(data, i))

    logger.info(
        "Verified %d item(s), %d failed",
        len(results),
        sum(1 for r in results if r.failed),
    )
    return results
