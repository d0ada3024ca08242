"""Stored override record format and tolerant decoding.

On-store format (one JSON document per order):
    {
      "address":         {"firstName", "lastName", "address1", "address2",
                          "city", "province", "zip", "phone", "notes"},
      "originalAddress": { ...same shape... },
      "timestamp":       "2026-01-05T12:00:00+00:00"
    }

decode_override() never raises: corrupt JSON, missing fields or an unknown
schema all decode to None ("no override"), so one bad entry can never take
down a page.
"""

import logging
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from src.op_overrides.domain.models import AddressOverride, EditedAddress

logger = logging.getLogger(__name__)


class AddressRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    first_name: str = Field("", alias="firstName")
    last_name: str = Field("", alias="lastName")
    address1: str
    address2: str | None = None
    city: str = ""
    province: str = ""
    zip: str = ""
    phone: str | None = None
    notes: str | None = None

    @classmethod
    def from_domain(cls, a: EditedAddress) -> "AddressRecord":
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

    def to_domain(self) -> EditedAddress:
        return EditedAddress(
            first_name=self.first_name,
            last_name=self.last_name,
            address1=self.address1,
            address2=self.address2,
            city=self.city,
            province=self.province,
            zip=self.zip,
            phone=self.phone,
            notes=self.notes,
        )


class OverrideRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    address: AddressRecord
    original_address: AddressRecord = Field(alias="originalAddress")
    timestamp: datetime


def encode_override(override: AddressOverride) -> str:
    record = OverrideRecord(
        address=AddressRecord.from_domain(override.address),
        original_address=AddressRecord.from_domain(override.original_address),
        timestamp=override.timestamp,
    )
    return record.model_dump_json(by_alias=True)


def decode_override(raw: str | bytes | None) -> AddressOverride | None:
    if raw is None:
        return None
    try:
        record = OverrideRecord.model_validate_json(raw)
    except ValidationError as exc:
        logger.warning("Ignoring unreadable address override record: %s", exc.errors()[:1])
        return None
    return AddressOverride(
        address=record.address.to_domain(),
        original_address=record.original_address.to_domain(),
        timestamp=record.timestamp,
    )
