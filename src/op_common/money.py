"""Money helpers for Shopify decimal-as-string amounts.

Shopify sends prices as strings ("15990.00"). They are parsed into Decimal
and never into float.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP


def parse_amount(value: str | int | float | None) -> Decimal:
    """'15990.00' -> Decimal('15990.00'); None/garbage -> Decimal('0')."""
    if value is None or value == "":
        return Decimal("0")
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return Decimal("0")


def format_clp(amount: Decimal) -> str:
    """Chilean peso display, no decimals, dot thousands: 15990 -> '$15.990'."""
    rounded = int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    sign = "-" if rounded < 0 else ""
    return f"{sign}${abs(rounded):,}".replace(",", ".")


def format_rut(rut: str | None) -> str:
    """Normalise a Chilean RUT: '123456785' / '12.345.678-5' -> '12.345.678-5'.

    Values too short to carry a verifier digit are returned unchanged.
    """
    if not rut:
        return ""
    clean = "".join(ch for ch in rut if ch.isdigit() or ch in "kK")
    if len(clean) < 2:
        return rut
    body, dv = clean[:-1], clean[-1].upper()
    groups = []
    while len(body) > 3:
        groups.insert(0, body[-3:])
        body = body[:-3]
    groups.insert(0, body)
    return ".".join(groups) + f"-{dv}"
