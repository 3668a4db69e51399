"""UpdateStats — counters and messages collected during a run."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from specparams.parameters.values import UpdateOutcome


class UpdateStats(BaseModel):
    """Per-run update counters.

    ``unchanged`` and ``failed_writes`` separate the two ways a field can
    end up without a write.
    """

    system_updates: int = 0
    size_updates: int = 0
    quantity_updates: int = 0
    unchanged: int = 0
    failed_writes: int = 0
    elements_processed: int = 0
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @property
    def total_updates(self) -> int:
        return self.system_updates + self.size_updates + self.quantity_updates

    def record(self, field: str, outcome: UpdateOutcome) -> bool:
        """Count *outcome* for *field*; return True if a write happened."""
        if outcome is UpdateOutcome.UPDATED:
            attr = f"{field}_updates"
            setattr(self, attr, getattr(self, attr) + 1)
            return True
        if outcome is UpdateOutcome.UNCHANGED:
            self.unchanged += 1
        else:
            self.failed_writes += 1
        return False

    def add_error(self, param_name: str, element_id: object, message: str) -> None:
        stamp = datetime.now().strftime("%H:%M:%S")
        self.errors.append(f"[{stamp}] {param_name} failed for {element_id}: {message}")

    def add_warning(self, element_id: object, message: str) -> None:
        self.warnings.append(f"{element_id}: {message}")
