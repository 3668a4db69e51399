"""UpdateReport — summary of a SPEC parameter run."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

from specparams.updater.stats import UpdateStats

_MAX_LISTED = 50


class UpdateReport:
    """Outcome of one :meth:`SpecUpdater.run`."""

    def __init__(
        self,
        stats: UpdateStats,
        document_title: str = "",
        elapsed_seconds: float = 0.0,
        used_selection: bool = False,
        finished_at: datetime | str | None = None,
    ) -> None:
        self.stats = stats
        self.document_title = document_title
        self.elapsed_seconds = elapsed_seconds
        self.used_selection = used_selection
        if finished_at is None:
            self.finished_at = datetime.now(timezone.utc)
        elif isinstance(finished_at, str):
            self.finished_at = datetime.fromisoformat(finished_at)
        else:
            self.finished_at = finished_at

    @property
    def mode(self) -> str:
        return "SELECTION" if self.used_selection else "ALL"

    def to_text(self) -> str:
        """Plain-text summary, suitable for a log file."""
        s = self.stats
        lines = [
            "SPEC PARAMETERS UPDATE",
            f"Document: {self.document_title}",
            f"Mode: {self.mode}",
            f"Time: {self.elapsed_seconds:.2f}s",
            "",
            f"Elements: {s.elements_processed}",
            f"SPEC_SYSTEM: {s.system_updates}",
            f"SPEC_SIZE: {s.size_updates}",
            f"SPEC_QUANTITY: {s.quantity_updates}",
            f"Total Updates: {s.total_updates}",
            f"Unchanged: {s.unchanged}",
            f"Failed Writes: {s.failed_writes}",
            f"Errors: {len(s.errors)}",
        ]

        if s.warnings:
            lines.append("")
            lines.append("WARNINGS:")
            lines.extend(f"  {w}" for w in s.warnings[:_MAX_LISTED])
            if len(s.warnings) > _MAX_LISTED:
                lines.append(f"  ... and {len(s.warnings) - _MAX_LISTED} more")

        if s.errors:
            lines.append("")
            lines.append("ERRORS:")
            lines.extend(f"  {e}" for e in s.errors[:_MAX_LISTED])
            if len(s.errors) > _MAX_LISTED:
                lines.append(f"  ... and {len(s.errors) - _MAX_LISTED} more")

        return "\n".join(lines) + "\n"

    def to_markdown(self) -> str:
        """Markdown summary with a counter table."""
        s = self.stats
        lines: list[str] = []
        lines.append(f"# SPEC Parameters Update: {self.document_title or 'Untitled'}")
        lines.append("")
        lines.append(f"**Mode:** {self.mode}")
        lines.append(f"**Finished:** {self.finished_at.strftime('%Y-%m-%d %H:%M UTC')}")
        lines.append(f"**Time:** {self.elapsed_seconds:.2f}s")
        lines.append("")
        lines.append("| Parameter | Updates |")
        lines.append("|-----------|---------|")
        lines.append(f"| SPEC_SYSTEM | {s.system_updates} |")
        lines.append(f"| SPEC_SIZE | {s.size_updates} |")
        lines.append(f"| SPEC_QUANTITY | {s.quantity_updates} |")
        lines.append(f"| **Total** | **{s.total_updates}** |")
        lines.append("")
        lines.append(
            f"**Summary:** {s.elements_processed} elements, {s.unchanged} unchanged, "
            f"{s.failed_writes} failed writes, {len(s.errors)} errors"
        )
        lines.append("")

        if s.warnings:
            lines.append("## Warnings")
            lines.append("")
            lines.extend(f"- {w}" for w in s.warnings[:_MAX_LISTED])
            lines.append("")

        if s.errors:
            lines.append("## Errors")
            lines.append("")
            lines.extend(f"- {e}" for e in s.errors[:_MAX_LISTED])
            lines.append("")

        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "document_title": self.document_title,
            "mode": self.mode,
            "elapsed_seconds": round(self.elapsed_seconds, 3),
            "finished_at": self.finished_at.isoformat(),
            "total_updates": self.stats.total_updates,
            "stats": self.stats.model_dump(),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, default=str)
