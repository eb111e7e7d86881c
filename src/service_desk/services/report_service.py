"""
Report service - writes the results of an import run to JSON files.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from service_desk.models import RecordKind

if TYPE_CHECKING:
    from service_desk.automations.batch_importer import BatchResult

logger = logging.getLogger(__name__)

REPORT_NAMES = {
    RecordKind.REVIEW: "Reviews",
    RecordKind.FAILURE_REPORT: "FailureReports",
}


class ReportService:
    """
    Writes one timestamped JSON file per result category.

    Layout:
    {results_dir}/
        Reviews_{d_m_Y_H_i_s}.json         # Created reviews
        FailureReports_{d_m_Y_H_i_s}.json  # Created failure reports
        Duplicates_{d_m_Y_H_i_s}.json      # [{"number", "reason"}]
        Errors_{d_m_Y_H_i_s}.json          # [{"number", "reason"}]

    Empty categories produce no file.
    """

    def __init__(self, results_dir: Path):
        self.results_dir = Path(results_dir)

    def write(self, result: "BatchResult", now: Optional[datetime] = None) -> list[Path]:
        """Write the report files for a batch and return their paths."""
        stamp = (now or datetime.now()).strftime("%d_%m_%Y_%H_%M_%S")
        self.results_dir.mkdir(parents=True, exist_ok=True)

        sections: list[tuple[str, list[dict]]] = []
        for kind, name in REPORT_NAMES.items():
            records = [record.to_dict() for record in result.created if record.kind == kind]
            sections.append((name, records))
        sections.append(("Duplicates", self._rejections(result.duplicates)))
        sections.append(("Errors", self._rejections(result.errors)))

        written = []
        for name, rows in sections:
            if not rows:
                continue
            path = self.results_dir / f"{name}_{stamp}.json"
            path.write_text(
                json.dumps(rows, ensure_ascii=False, indent=2),
                encoding="utf-8",
            )
            written.append(path)
            logger.info(f"Wrote {len(rows)} row(s) to {path}")

        return written

    @staticmethod
    def _rejections(items: list[tuple[Optional[int], str]]) -> list[dict]:
        return [{"number": number, "reason": reason} for number, reason in items]
