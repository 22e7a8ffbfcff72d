"""Advisory text attached to results for downstream agents.

Two static assets live here: the fixed content-safety block (``HINT``) and a
pool of sending-cadence tips (``TIPS``). A hint picker is any zero-argument
callable returning one string; ``get_hint_picker`` maps a mode name to one.
"""

import random
from typing import Callable, Optional

HintPicker = Callable[[], str]

HINT = """when writing the email, use these content safety rules to keep our domain reputation safe:
Subject: 30-60 chars. No ALL CAPS. Max one exclamation mark. No “quick question”, “act now”, “free!!!”, or urgency gimmicks. Must reflect the actual offer or content.
Preheader: completes the subject with plain language. No clickbait.
Links: use branded domains and HTTPS only. No open redirects. Limit total unique links to essential destinations."""

TIPS = (
    "Ramp up volume gradually: start a new sending domain at a few dozen emails per day and grow by no more than 20-30% daily.",
    "Keep a steady cadence. Sudden spikes in volume look like spam bursts to mailbox providers.",
    "Space follow-ups at least three business days apart, and stop after three attempts without a reply.",
    "Send during the recipient's working hours in their own time zone.",
    "Pause sending to a domain that returns repeated soft bounces and retry it the next day.",
    "Remove invalid and disposable addresses before every campaign; keep the bounce rate under 2%.",
    "Treat catch-all addresses as risky: send to them in small batches and watch the bounce rate.",
    "Avoid sending identical messages to many recipients at one company on the same day.",
    "Spread large campaigns over several days instead of one blast.",
    "Honour unsubscribes immediately and never re-add an address that opted out.",
)

HINT_MODES = ("fixed", "random")


def fixed_hint() -> str:
    return HINT


def random_tip(rng: Optional[random.Random] = None) -> str:
    """Pick one tip from the cadence pool."""
    return (rng or random).choice(TIPS)


def get_hint_picker(mode: str = "fixed", rng: Optional[random.Random] = None) -> HintPicker:
    """Return the hint picker for a mode ("fixed" or "random")."""
    if mode == "fixed":
        return fixed_hint
    if mode == "random":
        return lambda: random_tip(rng)
    raise ValueError(f"Unknown hint mode: {mode!r} (expected one of {', '.join(HINT_MODES)})")
