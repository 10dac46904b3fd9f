"""Models describing the practice scenarios offered by the simulator."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class Scenario:
    """A CSR situation the manager is coaching against."""

    id: str
    label: str
    context: str = ""

    def as_dict(self) -> dict[str, str]:
        return {"id": self.id, "label": self.label, "context": self.context}
