"""Report preview/download on top of the layout builder and PDFService."""
import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import Optional, Tuple

from kashrut_reports.domain.exceptions import ReportRenderError
from kashrut_reports.schemas import inspection_to_dict
from kashrut_reports.services.report_builder import build_report

from .inspection_service import InspectionService

logger = logging.getLogger(__name__)


@dataclass
class RenderedReport:
    content: bytes
    filename: str


class PreviewCache:
    """
    Process-wide store of rendered previews, one entry per inspection,
    keyed by the inspection's `updatedAt` so an edited record re-renders.

    Holds at most `max_entries` previews; the least recently used one is
    dropped when a new preview would exceed the limit.
    """

    def __init__(self, max_entries: int = 32):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self._entries: "OrderedDict[int, Tuple[str, bytes]]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, inspection_id: int, version: str) -> Optional[bytes]:
        with self._lock:
            entry = self._entries.get(inspection_id)
            if entry is None or entry[0] != version:
                return None
            self._entries.move_to_end(inspection_id)
            return entry[1]

    def put(self, inspection_id: int, version: str, content: bytes):
        # replacing the entry drops the previous preview's bytes
        with self._lock:
            self._entries[inspection_id] = (version, content)
            self._entries.move_to_end(inspection_id)
            while len(self._entries) > self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug(f"Preview cache full, dropped inspection {evicted}")

    def release(self, inspection_id: int) -> bool:
        with self._lock:
            return self._entries.pop(inspection_id, None) is not None

    def __contains__(self, inspection_id) -> bool:
        return inspection_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def report_filename(inspection: dict) -> str:
    factory_name = (inspection.get("factoryName") or "").replace("/", "-").replace("\\", "-")
    return f"inspection-report-{factory_name}-{inspection.get('gregorianDate')}.pdf"


class ReportService:
    def __init__(self, uow, pdf_service, preview_cache: PreviewCache):
        self._inspections = InspectionService(uow)
        self._pdf = pdf_service
        self._cache = preview_cache

    def _render(self, data: dict) -> bytes:
        if self._pdf is None:
            raise ReportRenderError("Report rendering is not available")
        document = build_report(data)
        try:
            return self._pdf.render(document, title=f"Inspection Report - {data.get('factoryName')}")
        except Exception as e:
            logger.error(f"❌ Report rendering failed for inspection {data.get('id')}: {e}")
            raise ReportRenderError()

    def preview(self, inspection_id: int) -> RenderedReport:
        """Rendered once per viewing session; served from cache until closed or edited."""
        data = inspection_to_dict(self._inspections.get_inspection(inspection_id))
        version = str(data.get("updatedAt"))

        content = self._cache.get(inspection_id, version)
        if content is None:
            content = self._render(data)
            self._cache.put(inspection_id, version, content)
            logger.info(f"📄 Preview rendered for inspection {inspection_id}")
        return RenderedReport(content=content, filename=report_filename(data))

    def close_preview(self, inspection_id: int) -> bool:
        return self._cache.release(inspection_id)

    def download(self, inspection_id: int) -> RenderedReport:
        """Always a fresh render."""
        data = inspection_to_dict(self._inspections.get_inspection(inspection_id))
        content = self._render(data)
        logger.info(f"📥 Report generated for download: inspection {inspection_id}")
        return RenderedReport(content=content, filename=report_filename(data))
