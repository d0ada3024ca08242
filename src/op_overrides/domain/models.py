"""Address override domain models — pure dataclasses.

An override is a local correction to an order's shipping address. It is
never pushed back to Shopify.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class EditedAddress:
    first_name: str = ""
    last_name: str = ""
    address1: str = ""
    address2: str | None = None
    city: str = ""
    province: str = ""
    zip: str = ""
    phone: str | None = None
    notes: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class AddressOverride:
    address: EditedAddress
    original_address: EditedAddress  # snapshot taken on first save, never replaced
    timestamp: datetime
