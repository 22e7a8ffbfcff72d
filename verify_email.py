#!/usr/bin/env python3
"""
verify_email.py — NeverBounce email verification for record batches

Features
- Syntax validation (email-validator) before any API call
- One NeverBounce single check per record, strictly in input order
- Continue-on-fail or fail-fast runs
- Optional agent hints attached to each result
- Credential test against the NeverBounce API

Environment (.env)
  NEVERBOUNCE_API_KEY=...

Usage
  # Verify addresses given on the command line
  python verify_email.py EMAIL [EMAIL ...] [--include-hints]

  # Verify records from a JSON array or JSON Lines file ("-" for stdin)
  python verify_email.py --input records.json --email-field Email

  # Check that the API key is accepted
  python verify_email.py --test-credentials
"""

from __future__ import annotations

import json
import logging
import socket
from typing import Any, Dict, List, Optional, TextIO, Tuple

import click
from dotenv import load_dotenv

from nbverify import client
from nbverify.config import (
    API_KEY_ENV,
    DEFAULT_EMAIL_FIELD,
    DEFAULT_OUTPUT_FIELD,
    DEFAULT_TIMEOUT,
    VerifyOptions,
    get_api_key,
)
from nbverify.errors import ItemError
from nbverify.hints import HINT_MODES
from nbverify.pipeline import verify_items

# --------------------------
# Input
# --------------------------


def load_records(text: str) -> List[Dict[str, Any]]:
    """Parse a JSON array of objects, or JSON Lines."""
    text = text.strip()
    if not text:
        return []
    if text.startswith("["):
        data = json.loads(text)
    else:
        data = [json.loads(line) for line in text.splitlines() if line.strip()]

    for i, item in enumerate(data):
        if not isinstance(item, dict):
            raise ValueError(f"Record {i} is not a JSON object")
    return data


# --------------------------
# CLI
# --------------------------


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("emails", nargs=-1)
@click.option(
    "--input",
    "input_file",
    type=click.File("r"),
    help="JSON array or JSON Lines file of records ('-' for stdin).",
)
@click.option("--email-field", default=DEFAULT_EMAIL_FIELD, show_default=True)
@click.option("--output-field", default=DEFAULT_OUTPUT_FIELD, show_default=True)
@click.option("--timeout", type=float, default=DEFAULT_TIMEOUT, show_default=True)
@click.option("--include-hints", is_flag=True, help="Attach agent instructions to results.")
@click.option(
    "--hint-mode",
    type=click.Choice(HINT_MODES),
    default="fixed",
    show_default=True,
)
@click.option(
    "--continue-on-fail/--fail-fast",
    default=False,
    help="Record per-item errors instead of aborting the run.",
)
@click.option("--test-credentials", is_flag=True, help="Only check the API key.")
@click.option("-v", "--verbose", is_flag=True)
def main(
    emails: Tuple[str, ...],
    input_file: Optional[TextIO],
    email_field: str,
    output_field: str,
    timeout: float,
    include_hints: bool,
    hint_mode: str,
    continue_on_fail: bool,
    test_credentials: bool,
    verbose: bool,
) -> None:
    load_dotenv()
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    api_key = get_api_key()

    if test_credentials:
        if not api_key:
            raise click.ClickException(f"{API_KEY_ENV} is not set")
        if not client.test_credentials(api_key, timeout=timeout):
            raise click.ClickException("NeverBounce rejected the API key")
        click.echo("✅ NeverBounce accepted the API key", err=True)
        return

    records: List[Dict[str, Any]] = [{email_field: e} for e in emails]
    if input_file is not None:
        try:
            records.extend(load_records(input_file.read()))
        except ValueError as e:
            raise click.ClickException(f"Could not read records: {e}")

    if not records:
        raise click.UsageError("Give at least one EMAIL or --input")

    try:
        options = VerifyOptions(
            email_field=email_field,
            output_field=output_field,
            timeout=timeout,
            include_hints=include_hints,
            hint_mode=hint_mode,
        )
    except ValueError as e:
        raise click.BadParameter(str(e))

    try:
        results = verify_items(records, api_key, options, continue_on_fail=continue_on_fail)
    except ItemError as e:
        raise click.ClickException(str(e))

    click.echo(json.dumps([r.to_dict() for r in results], indent=2, ensure_ascii=False))

    failed = sum(1 for r in results if r.failed)
    click.echo(f"📧 Verified: {len(results) - failed}   ❌ Failed: {failed}", err=True)


if __name__ == "__main__":
    # Keep HTTP from hanging forever
    socket.setdefaulttimeout(DEFAULT_TIMEOUT)
    main()
