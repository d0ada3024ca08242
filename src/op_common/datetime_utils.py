"""Datetime utilities."""

from datetime import date, datetime, timezone


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def parse_timestamp(value: str) -> datetime:
    """Parse a Shopify ISO-8601 timestamp ('2026-01-05T10:00:00-03:00' or '...Z').

    Naive values are assumed to be UTC. Raises ValueError on garbage.
    """
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_display_date(value: date) -> str:
    """DD/MM/YYYY, the format the store uses on screen and on labels."""
    return value.strftime("%d/%m/%Y")
