"""Bulk fulfillment outcome — all-or-nothing surfacing.

Requests that succeeded are not undone when a sibling fails; the batch as a
whole is still reported as failed and the operator retries manually.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class BulkFulfillResult:
    attempted: int
    errors: list[str] = field(default_factory=list)

    @property
    def failed(self) -> int:
        return len(self.errors)

    @property
    def ok(self) -> bool:
        return not self.errors
