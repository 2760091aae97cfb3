"""
Explorer session: one store shared by the filter engine, pager and exporter.
"""

import logging
from typing import Any, List, Optional

from .aggregation import (
    compute_model_averages,
    compute_summary,
    model_detail,
    rank_model_averages,
    select_top_model,
)
from .exporter import Exporter
from .filters import FilterEngine
from .models import BenchmarkRecord, DetailEntry, Dimension, ExportResult, ModelAverage, Severity, Summary
from .notifications import Notifier
from .pager import Pager
from .store import BenchmarkStore, read_document

logger = logging.getLogger(__name__)


class ExplorerSession:
    """All explorer state of one user session, mutated only through its setters."""

    def __init__(self, notifier: Notifier, export_dir: str = "exports", exporter: Optional[Exporter] = None):
        self.notifier = notifier
        self.store = BenchmarkStore()
        self.filters = FilterEngine(self.store)
        self.pager = Pager()
        self.exporter = exporter or Exporter(export_dir, notifier)

    def load_document(self, document: Any) -> int:
        """Rebuild the record set from a raw document."""
        count = self.store.load(document)
        if count == 0:
            self.notifier.notify(
                "No benchmarks found",
                "The evaluation results document has no benchmarks available.",
                Severity.WARNING,
            )
        self.filters.refresh()
        self._sync()
        return count

    def load_file(self, path: str) -> int:
        """Read the document from disk; unreadable input leaves an empty record set."""
        try:
            document = read_document(path)
        except (OSError, ValueError) as e:
            logger.error(f"Error loading benchmarks from {path}: {e}")
            self.notifier.notify(
                "Error loading benchmarks",
                f"Could not process the evaluation results file {path}.",
                Severity.ERROR,
            )
            self.store.clear()
            self.filters.refresh()
            self._sync()
            return 0
        return self.load_document(document)

    def _sync(self) -> None:
        self.pager.update(self.filters.ordered_view())

    def select(self, dimension, value: str) -> bool:
        changed = self.filters.select(dimension, value)
        self._sync()
        return changed

    def apply_filters(self, view_mode=None, order=None, **selections: Optional[str]) -> None:
        """Set view mode, selections (outer to inner) and sort order in one step."""
        if view_mode is not None:
            self.filters.set_view_mode(view_mode)
        self.filters.apply(selections, order)
        self._sync()

    def set_view_mode(self, mode) -> bool:
        changed = self.filters.set_view_mode(mode)
        self._sync()
        return changed

    def set_sort_order(self, order) -> None:
        self.filters.set_sort_order(order)
        self._sync()

    def reset_filters(self) -> None:
        self.filters.reset()
        self._sync()

    def page(self) -> List[BenchmarkRecord]:
        """Records on the current page of the ordered list."""
        return self.pager.window

    def go_to_page(self, page: int) -> None:
        self.pager.go_to_page(page)

    def summary(self) -> Summary:
        return compute_summary(self.filters.full_view(), len(self.filters.options(Dimension.MODEL)))

    def model_averages(self) -> List[ModelAverage]:
        """Per-model averages over the aggregate view, best first."""
        return rank_model_averages(compute_model_averages(self.filters.aggregate_view()))

    def top_model(self) -> Optional[ModelAverage]:
        return select_top_model(compute_model_averages(self.filters.aggregate_view()))

    def top_model_detail(self) -> List[DetailEntry]:
        top = self.top_model()
        if top is None:
            return []
        return model_detail(self.filters.aggregate_view(), top.model_name)

    def export(self, export_format) -> Optional[ExportResult]:
        """Export the filtered list in its current order."""
        return self.exporter.export(self.filters.ordered_view(), export_format)
