# src/op_overrides/application/schemas.py
from datetime import datetime

from pydantic import BaseModel, field_validator

from src.op_overrides.domain.address import format_address_for_display, split_full_name
from src.op_overrides.domain.models import AddressOverride, EditedAddress


class AddressOut(BaseModel):
    first_name: str
    last_name: str
    address1: str
    address2: str | None = None
    city: str
    province: str
    zip: str
    phone: str | None = None
    notes: str | None = None

    @classmethod
    def from_domain(cls, a: EditedAddress) -> "AddressOut":
        return cls(
            first_name=a.first_name,
            last_name=a.last_name,
            address1=a.address1,
            address2=a.address2,
            city=a.city,
            province=a.province,
            zip=a.zip,
            phone=a.phone,
            notes=a.notes,
        )


class SaveOverrideRequest(BaseModel):
    """Edit form payload. full_name, when given, wins over first/last name."""

    full_name: str | None = None
    first_name: str = ""
    last_name: str = ""
    address1: str
    address2: str | None = None
    city: str = ""
    province: str = ""
    zip: str = ""
    phone: str | None = None
    notes: str | None = None

    @field_validator("address1")
    @classmethod
    def address1_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("address1 must not be blank")
        return v.strip()

    def to_domain(self) -> EditedAddress:
        first, last = self.first_name, self.last_name
        if self.full_name is not None:
            first, last = split_full_name(self.full_name)
        return EditedAddress(
            first_name=first,
            last_name=last,
            address1=self.address1,
            address2=self.address2,
            city=self.city,
            province=self.province,
            zip=self.zip,
            phone=self.phone,
            notes=self.notes,
        )


class OverrideResponse(BaseModel):
    order_id: str
    address: AddressOut
    original_address: AddressOut
    timestamp: datetime
    display: str
    local_only: bool = True  # never synced to Shopify

    @classmethod
    def from_domain(cls, order_id: int | str, o: AddressOverride) -> "OverrideResponse":
        return cls(
            order_id=str(order_id),
            address=AddressOut.from_domain(o.address),
            original_address=AddressOut.from_domain(o.original_address),
            timestamp=o.timestamp,
            display=format_address_for_display(o.address),
        )


class OverrideListResponse(BaseModel):
    items: list[OverrideResponse]
    count: int
