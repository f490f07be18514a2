"""
Mappings Report Generator
==========================

Serialises a loaded symbol table to a structured JSON document for
consumption by tools outside the Python process (remap appliers, IDE
indexers, diffing scripts).
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from mappings.core.symbol_table import SymbolTable

REPORT_TYPE = "alloy_mapping_table"
REPORT_VERSION = "1.0.0"


class MappingsReportGenerator:
    """Produces JSON reports from a :class:`SymbolTable`."""

    def build_report(
        self, table: SymbolTable, source: str | None = None
    ) -> dict[str, Any]:
        """Assemble the report document without writing it.

        Args:
            table: The symbol table to report.
            source: Path of the mapping file the table was loaded from.
        """
        return {
            "report_type": REPORT_TYPE,
            "version": REPORT_VERSION,
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "source": source,
            "stats": table.stats.model_dump(),
            "classes": [cm.model_dump(mode="json") for cm in table],
        }

    def generate_json(
        self,
        table: SymbolTable,
        output_path: str | Path,
        source: str | None = None,
    ) -> str:
        """Write the report to *output_path*.

        Returns:
            The absolute path of the generated report.
        """
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as fh:
            json.dump(self.build_report(table, source), fh, indent=2, ensure_ascii=False)
        return str(path.resolve())
