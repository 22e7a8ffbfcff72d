"""NeverBounce API email verification client."""

import logging
from typing import Any, Dict, Optional

import requests

from .errors import CredentialError, UpstreamError

logger = logging.getLogger(__name__)

API_BASE = "https://api.neverbounce.com"
CHECK_URL = f"{API_BASE}/v4/single/check"
CREDENTIAL_TEST_URL = f"{API_BASE}/v4.0/email-verification"

DEFAULT_TIMEOUT = 30

# API-level failures NeverBounce reports with HTTP 200
FAILURE_STATUSES = {
    "auth_failure",
    "general_failure",
    "temp_unavail",
    "throttle_triggered",
    "bad_referrer",
}


def _auth_headers(api_key: str) -> Dict[str, str]:
    return {"Authorization": api_key}


def check_email(
    email: str, api_key: Optional[str], timeout: float = DEFAULT_TIMEOUT
) -> Dict[str, Any]:
    """Call the NeverBounce single check endpoint; return the raw response body."""
    if not api_key:
        raise CredentialError("No NeverBounce API key configured")

    try:
        r = requests.get(
            CHECK_URL,
            params={"email": email, "key": api_key},
            headers=_auth_headers(api_key),
            timeout=timeout,
        )
        r.raise_for_status()
    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else None
        if status in (401, 403):
            raise CredentialError(f"NeverBounce rejected the API key: {e}") from e
        raise UpstreamError(f"HTTP error: {e}") from e
    except requests.RequestException as e:
        raise UpstreamError(f"HTTP error: {e}") from e

    try:
        data = r.json()
    except ValueError as e:
        raise UpstreamError(f"Invalid JSON from NeverBounce: {e}") from e

    if not isinstance(data, dict):
        raise UpstreamError("Unexpected response from NeverBounce")

    status = data.get("status")
    if status is not None and not isinstance(status, (str, int, float)):
        raise UpstreamError(f"Unexpected status from NeverBounce: {status!r}")
    if status in FAILURE_STATUSES:
        message = data.get("message") or status
        if status == "auth_failure":
            raise CredentialError(f"NeverBounce rejected the API key: {message}")
        raise UpstreamError(f"NeverBounce error ({status}): {message}")

    logger.debug("NeverBounce result: %s", data.get("result"))
    return data


def test_credentials(api_key: Optional[str], timeout: float = DEFAULT_TIMEOUT) -> bool:
    """Return True iff NeverBounce accepts the API key."""
    if not api_key:
        return False

    try:
        r = requests.get(
            CREDENTIAL_TEST_URL,
            headers=_auth_headers(api_key),
            timeout=timeout,
        )
    except requests.RequestException as e:
        logger.warning("Credential test failed: %s", e)
        return False

    if not r.ok:
        logger.info("Credential test rejected with HTTP %s", r.status_code)
    return r.ok
