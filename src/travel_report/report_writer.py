"""Write report records and page manifests as JSON."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from .layout_engine import ReportLayout, Page
from .pdf_renderer import ReportWriteError
from .records import ReportRecord
from .table_templates import SectionKind

logger = logging.getLogger(__name__)


def page_to_manifest(page: Page, total_pages: int) -> Dict[str, Any]:
    """Summarize one laid-out page."""
    return {
        "page_index": page.index,
        "page_number": page.index + 1,
        "total_pages": total_pages,
        "instructions": len(page.instructions),
        "rows": {kind.value: page.row_count(kind.value) for kind in SectionKind},
        "header_rows": {kind.value: page.header_count(kind.value) for kind in SectionKind},
    }


def write_layout_manifest(layout: ReportLayout, path: Path) -> List[Dict[str, Any]]:
    """Write one JSON line per page; returns the written entries."""
    path = Path(path)
    entries = [page_to_manifest(page, layout.page_count) for page in layout.pages]
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            for entry in entries:
                f.write(json.dumps(entry) + "\n")
    except OSError as exc:
        logger.error("Failed to write manifest %s: %s", path, exc)
        raise ReportWriteError(path, exc) from exc
    return entries


def write_report_json(record: ReportRecord, path: Path) -> Path:
    """Write the record, summary included, as indented JSON."""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(record.to_dict(), f, indent=2, default=str)
    except OSError as exc:
        logger.error("Failed to write report %s: %s", path, exc)
        raise ReportWriteError(path, exc) from exc
    return path
