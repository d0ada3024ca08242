"""Address conversions between the Shopify shape and the override shape."""

from src.op_overrides.domain.models import EditedAddress
from src.op_shopify.domain.models import Customer, ShippingAddress

NO_ADDRESS_TEXT = "Sin dirección"


def canonicalize(
    shipping: ShippingAddress | None,
    customer: Customer | None = None,
) -> EditedAddress | None:
    """Shopify address → EditedAddress; the customer's name fills a nameless address."""
    if shipping is None:
        return None
    first_name = shipping.first_name or ""
    last_name = shipping.last_name or ""
    if not first_name and not last_name and customer is not None:
        first_name = customer.first_name or ""
        last_name = customer.last_name or ""
    return EditedAddress(
        first_name=first_name,
        last_name=last_name,
        address1=shipping.address1 or "",
        address2=shipping.address2 or "",
        city=shipping.city or "",
        province=shipping.province or "",
        zip=shipping.zip or "",
        phone=shipping.phone or "",
    )


def split_full_name(full_name: str) -> tuple[str, str]:
    """'Ana María Pérez' → ('Ana', 'María Pérez'). First token is the first name."""
    parts = full_name.split()
    if not parts:
        return "", ""
    return parts[0], " ".join(parts[1:])


def format_address_for_display(address: EditedAddress | None) -> str:
    if address is None:
        return NO_ADDRESS_TEXT
    locality = ", ".join(p for p in (address.city, address.province) if p)
    parts = [address.full_name, address.address1, address.address2, locality, address.zip]
    return ", ".join(p for p in parts if p)
