"""Shared fixtures: a mocked NeverBounce endpoint."""

from unittest.mock import Mock, patch

import pytest
import requests

VALID_RESPONSE = {
    "result": "valid",
    "status": "valid",
    "status_code": 0,
    "flags": [],
}


def make_response(json_data=None, status_code=200):
    resp = Mock()
    resp.status_code = status_code
    resp.ok = 200 <= status_code < 300
    resp.json.return_value = json_data
    if resp.ok:
        resp.raise_for_status.return_value = None
    else:
        resp.raise_for_status.side_effect = requests.HTTPError(
            f"{status_code} Error", response=resp
        )
    return resp


@pytest.fixture
def mock_get():
    with patch("nbverify.client.requests.get") as get:
        get.return_value = make_response(dict(VALID_RESPONSE))
        yield get
