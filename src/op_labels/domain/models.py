"""Label domain models — render-ready descriptors, no physical units."""

from dataclasses import dataclass, field

from src.op_overrides.domain.models import EditedAddress


@dataclass(frozen=True)
class GridGeometry:
    columns: int = 2
    rows: int = 6

    @property
    def capacity(self) -> int:
        return self.columns * self.rows


COMPACT_GRID = GridGeometry(columns=2, rows=6)


@dataclass(frozen=True)
class LabelDescriptor:
    order_id: int
    order_name: str
    address: EditedAddress | None  # None → "no address" marker, label still printed
    items: list[str] = field(default_factory=list)  # "2x Title", first lines only
    extra_items: int = 0  # lines not listed in items
    item_count: int = 0
    total: str = ""
    email: str | None = None
    rut: str | None = None
    edited: bool = False

    @property
    def has_address(self) -> bool:
        return self.address is not None


@dataclass(frozen=True)
class LabelPage:
    index: int
    labels: list[LabelDescriptor]
