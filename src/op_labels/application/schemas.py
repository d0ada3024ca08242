# src/op_labels/application/schemas.py
"""Label sheet response schemas and print presets.

Paper dimensions live here, in the presentation layer. The layout engine
only knows pages, grid cells and label order.
"""

from datetime import date

from pydantic import BaseModel

from src.op_common.datetime_utils import format_display_date
from src.op_common.enums import PaperSize
from src.op_labels.domain.models import GridGeometry, LabelDescriptor, LabelPage
from src.op_overrides.application.schemas import AddressOut

PAPER_SIZES: dict[PaperSize, tuple[int, int, str]] = {
    PaperSize.CARTA: (216, 279, "Carta (216x279mm)"),
    PaperSize.OFICIO: (216, 330, "Oficio (216x330mm)"),
    PaperSize.A4: (210, 297, "A4 (210x297mm)"),
}


class PaperOut(BaseModel):
    size: PaperSize
    name: str
    width_mm: int
    height_mm: int

    @classmethod
    def for_size(cls, size: PaperSize) -> "PaperOut":
        width, height, name = PAPER_SIZES[size]
        return cls(size=size, name=name, width_mm=width, height_mm=height)


class GridOut(BaseModel):
    columns: int
    rows: int
    capacity: int


class LabelOut(BaseModel):
    order_id: int
    order_name: str
    has_address: bool
    address: AddressOut | None
    items: list[str]
    extra_items: int
    item_count: int
    total: str
    email: str | None
    rut: str | None
    edited: bool

    @classmethod
    def from_domain(cls, label: LabelDescriptor, show_products: bool = True) -> "LabelOut":
        return cls(
            order_id=label.order_id,
            order_name=label.order_name,
            has_address=label.has_address,
            address=AddressOut.from_domain(label.address) if label.address else None,
            items=label.items if show_products else [],
            extra_items=label.extra_items if show_products else 0,
            item_count=label.item_count,
            total=label.total,
            email=label.email,
            rut=label.rut,
            edited=label.edited,
        )


class LabelPageOut(BaseModel):
    index: int
    labels: list[LabelOut]


class LabelSheetResponse(BaseModel):
    paper: PaperOut
    grid: GridOut
    show_products: bool
    printed_on: str
    total_labels: int
    edited_count: int
    pages: list[LabelPageOut]

    @classmethod
    def build(
        cls,
        pages: list[LabelPage],
        paper: PaperSize,
        grid: GridGeometry,
        show_products: bool,
        today: date,
    ) -> "LabelSheetResponse":
        labels = [label for page in pages for label in page.labels]
        return cls(
            paper=PaperOut.for_size(paper),
            grid=GridOut(columns=grid.columns, rows=grid.rows, capacity=grid.capacity),
            show_products=show_products,
            printed_on=format_display_date(today),
            total_labels=len(labels),
            edited_count=sum(1 for label in labels if label.edited),
            pages=[
                LabelPageOut(
                    index=page.index,
                    labels=[LabelOut.from_domain(label, show_products) for label in page.labels],
                )
                for page in pages
            ],
        )
