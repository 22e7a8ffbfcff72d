"""Tests for the per-record verification pipeline."""

from datetime import datetime

import pytest
import requests

from nbverify.config import VerifyOptions
from nbverify.errors import InvalidFormatError, ItemError, MissingFieldError, UpstreamError
from nbverify.hints import HINT, TIPS
from nbverify.pipeline import extract_email, verify_items

from conftest import make_response

KEY = "secret"


def result_core(item, field="verification_result"):
    result = item.json[field]
    return {k: result[k] for k in ("valid", "status", "flags", "suggested_correction")}


class TestExtractEmail:
    def test_missing_field(self):
        with pytest.raises(MissingFieldError, match='No email found in field "Email"'):
            extract_email({"name": "x"}, "Email")

    def test_empty_field(self):
        with pytest.raises(MissingFieldError):
            extract_email({"Email": ""}, "Email")

    def test_invalid_format(self):
        with pytest.raises(InvalidFormatError) as exc:
            extract_email({"Email": "not-an-email"}, "Email")
        assert str(exc.value) == 'Invalid email format in field "Email": not-an-email'
        assert exc.value.reason.startswith("Syntax error")

    def test_none_value_is_missing(self):
        with pytest.raises(MissingFieldError):
            extract_email({"Email": None}, "Email")

    def test_non_string_value_is_stringified(self):
        with pytest.raises(InvalidFormatError) as exc:
            extract_email({"Email": 12345}, "Email")
        assert exc.value.value == "12345"
        assert str(exc.value) == 'Invalid email format in field "Email": 12345'

    def test_reserved_domain_is_accepted(self):
        assert extract_email({"Email": "user@corp.local"}, "Email") == "user@corp.local"


class TestVerifyItems:
    def test_valid_address(self, mock_get):
        items = verify_items([{"Email": "user@example.com", "name": "Ann"}], KEY)

        assert len(items) == 1
        item = items[0]
        assert item.paired_item == 0
        assert item.json["name"] == "Ann"
        assert item.json["Email"] == "user@example.com"
        assert result_core(item) == {
            "valid": True,
            "status": "valid",
            "flags": [],
            "suggested_correction": None,
        }
        assert item.json["verification_result"]["raw_response"]["status_code"] == 0
        assert item.json["email_verified"] is True
        datetime.fromisoformat(item.json["verification_timestamp"])

    def test_input_record_is_not_mutated(self, mock_get):
        record = {"Email": "user@example.com"}
        verify_items([record], KEY)
        assert record == {"Email": "user@example.com"}

    def test_custom_fields_and_timeout(self, mock_get):
        options = VerifyOptions(email_field="work", output_field="nb", timeout=7)
        items = verify_items([{"work": "user@example.com"}], KEY, options)

        assert "nb" in items[0].json
        assert "verification_result" not in items[0].json
        assert mock_get.call_args.kwargs["timeout"] == 7

    def test_hints_absent_by_default(self, mock_get):
        items = verify_items([{"Email": "user@example.com"}], KEY)
        assert "agent_instructions" not in items[0].json["verification_result"]

    def test_hints_fixed(self, mock_get):
        options = VerifyOptions(include_hints=True)
        items = verify_items([{"Email": "user@example.com"}], KEY, options)
        assert items[0].json["verification_result"]["agent_instructions"] == HINT

    def test_hints_random(self, mock_get):
        options = VerifyOptions(include_hints=True, hint_mode="random")
        items = verify_items([{"Email": "user@example.com"}], KEY, options)
        assert items[0].json["verification_result"]["agent_instructions"] in TIPS

    def test_custom_hint_picker(self, mock_get):
        options = VerifyOptions(include_hints=True)
        items = verify_items(
            [{"Email": "user@example.com"}], KEY, options, hint_picker=lambda: "tip"
        )
        assert items[0].json["verification_result"]["agent_instructions"] == "tip"

    def test_one_call_per_valid_record(self, mock_get):
        records = [{"Email": f"user{i}@example.com"} for i in range(3)]
        verify_items(records, KEY)
        assert mock_get.call_count == 3
        sent = [c.kwargs["params"]["email"] for c in mock_get.call_args_list]
        assert sent == ["user0@example.com", "user1@example.com", "user2@example.com"]

    def test_idempotent_results(self, mock_get):
        records = [{"Email": "user@example.com"}]
        first = verify_items(records, KEY)
        second = verify_items(records, KEY)
        assert result_core(first[0]) == result_core(second[0])

    def test_empty_input(self, mock_get):
        assert verify_items([], KEY) == []
        mock_get.assert_not_called()


class TestContinueOnFail:
    def test_errors_become_records_in_order(self, mock_get):
        records = [
            {"Email": "user@example.com"},
            {"name": "no email"},
            {"Email": "not-an-email"},
            {"Email": "other@example.com"},
        ]
        items = verify_items(records, KEY, continue_on_fail=True)

        assert len(items) == len(records)
        assert [i.paired_item for i in items] == [0, 1, 2, 3]
        assert items[1].json == {"error": 'No email found in field "Email"'}
        assert items[2].json == {"error": 'Invalid email format in field "Email": not-an-email'}
        assert items[1].failed and items[2].failed
        assert items[3].json["verification_result"]["valid"] is True
        # invalid records never reach the API
        assert mock_get.call_count == 2

    def test_upstream_error_is_captured(self, mock_get):
        mock_get.side_effect = [
            requests.ConnectionError("down"),
            make_response({"result": "invalid", "status": "success"}),
        ]
        items = verify_items(
            [{"Email": "a@example.com"}, {"Email": "b@example.com"}],
            KEY,
            continue_on_fail=True,
        )
        assert set(items[0].json) == {"error"}
        assert isinstance(items[0].error, UpstreamError)
        assert items[0].error.item_index == 0
        assert items[1].json["verification_result"]["valid"] is False

    def test_malformed_status_is_captured(self, mock_get):
        mock_get.side_effect = [
            make_response({"result": "valid", "status": {"x": 1}}),
            make_response({"result": "valid", "status": "success"}),
        ]
        items = verify_items(
            [{"Email": "a@example.com"}, {"Email": "b@example.com"}],
            KEY,
            continue_on_fail=True,
        )
        assert items[0].json["error"].startswith("Unexpected status from NeverBounce")
        assert isinstance(items[0].error, UpstreamError)
        assert items[1].json["verification_result"]["valid"] is True

    def test_missing_key_fails_every_record(self, mock_get):
        items = verify_items(
            [{"Email": "a@example.com"}, {"Email": "b@example.com"}],
            None,
            continue_on_fail=True,
        )
        assert all(i.failed for i in items)
        mock_get.assert_not_called()


class TestFailFast:
    def test_first_error_aborts_run(self, mock_get):
        records = [
            {"Email": "user@example.com"},
            {"Email": "not-an-email"},
            {"Email": "other@example.com"},
        ]
        with pytest.raises(ItemError) as exc:
            verify_items(records, KEY)

        assert exc.value.item_index == 1
        assert isinstance(exc.value.cause, InvalidFormatError)
        assert "[item 1]" in str(exc.value)
        # the record after the failure is never processed
        assert mock_get.call_count == 1

    def test_upstream_error_aborts_run(self, mock_get):
        mock_get.return_value = make_response({}, status_code=503)
        with pytest.raises(ItemError) as exc:
            verify_items([{"Email": "user@example.com"}], KEY)
        assert isinstance(exc.value.__cause__, UpstreamError)
