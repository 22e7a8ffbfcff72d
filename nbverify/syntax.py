"""Syntax-only email validation (email-validator)."""

from typing import List, Optional, Tuple

from email_validator import EmailNotValidError, validate_email


def normalize_email(email: str) -> Tuple[bool, Optional[str], Optional[str], List[str]]:
    """Validate syntax only; return (valid, normalized, domain, notes)."""
    notes: List[str] = []
    if email.count("@") != 1:
        notes.append("Syntax error: expected exactly one @-sign.")
        return False, None, None, notes
    try:
        v = validate_email(
            email,
            check_deliverability=False,
            allow_smtputf8=False,
            globally_deliverable=False,
        )
        return True, v.normalized, v.domain, notes
    except EmailNotValidError as e:
        notes.append(f"Syntax error: {e}")
        return False, None, None, notes


def is_valid_syntax(email: str) -> bool:
    valid, _, _, _ = normalize_email(email)
    return valid
