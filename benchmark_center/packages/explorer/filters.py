"""
Cascading multi-dimension filter over the benchmark store.
"""

import logging
from typing import Dict, Iterable, List, Optional

from .models import ALL, BenchmarkRecord, Dimension, SortOrder, ViewMode
from .resolvers import SENTINELS, resolve
from .store import BenchmarkStore

logger = logging.getLogger(__name__)

# Outer to inner: option sets of a dimension depend on the dimensions before it
DIMENSION_ORDER = (
    Dimension.TASK,
    Dimension.MODEL_FAMILY,
    Dimension.MODEL,
    Dimension.TECHNIQUE,
    Dimension.BENCHMARK,
)

# Dimensions whose change resets every inner dimension
CASCADING_DIMENSIONS = frozenset({Dimension.TASK})

# Dimensions each view mode leaves untouched when cascading
CASCADE_EXEMPT = {
    ViewMode.LIST: frozenset(),
    ViewMode.AGGREGATE: frozenset({Dimension.BENCHMARK}),
}

# Values listed first, in this order, when present in the data
PREFERRED_OPTIONS = {
    Dimension.TASK: ("aqua_rat", "esnli", "gsm8k", "math_qa", "strategy_qa"),
    Dimension.BENCHMARK: ("bbh", "gpqa", "gsm8k_bench", "hendrycks_math", "mmlu"),
}


def _unique(values: Iterable[str]) -> List[str]:
    seen = set()
    unique = []
    for value in values:
        if value not in seen:
            seen.add(value)
            unique.append(value)
    return unique


class FilterEngine:
    """Holds the filter selections, view mode and sort order over a shared store."""

    def __init__(self, store: BenchmarkStore):
        self.store = store
        self._selections: Dict[Dimension, str] = {dimension: ALL for dimension in DIMENSION_ORDER}
        self.view_mode = ViewMode.LIST
        self.sort_order = SortOrder.DESC

    @property
    def selections(self) -> Dict[str, str]:
        return {dimension.value: value for dimension, value in self._selections.items()}

    def selection(self, dimension) -> str:
        return self._selections[Dimension(dimension)]

    def matches(self, record: BenchmarkRecord, ignore_benchmark: bool = False) -> bool:
        """True when the record satisfies every active selection."""
        for dimension in DIMENSION_ORDER:
            if ignore_benchmark and dimension is Dimension.BENCHMARK:
                continue
            value = self._selections[dimension]
            if value != ALL and resolve(dimension, record) != value:
                return False
        return True

    def full_view(self) -> List[BenchmarkRecord]:
        """Records passing every selection; feeds the list, counters and ranking."""
        return [record for record in self.store if self.matches(record)]

    def aggregate_view(self) -> List[BenchmarkRecord]:
        """Records passing every selection except the benchmark one; feeds per-model averages."""
        return [record for record in self.store if self.matches(record, ignore_benchmark=True)]

    def ordered_view(self) -> List[BenchmarkRecord]:
        """Full view sorted by accuracy in the current sort order (stable)."""
        return sorted(
            self.full_view(),
            key=lambda record: record.accuracy_percent,
            reverse=self.sort_order is SortOrder.DESC,
        )

    def options(self, dimension) -> List[str]:
        """Selectable values of a dimension, restricted by the outer selections only."""
        dimension = Dimension(dimension)
        outer = DIMENSION_ORDER[:DIMENSION_ORDER.index(dimension)]
        active = [(d, self._selections[d]) for d in outer if self._selections[d] != ALL]

        values = _unique(
            resolve(dimension, record)
            for record in self.store
            if all(resolve(d, record) == value for d, value in active)
        )
        values = [value for value in values if value and value != SENTINELS[dimension]]

        preferred = PREFERRED_OPTIONS.get(dimension)
        if preferred:
            head = [value for value in preferred if value in values]
            values = head + [value for value in values if value not in preferred]
        return values

    def all_options(self) -> Dict[str, List[str]]:
        return {dimension.value: self.options(dimension) for dimension in DIMENSION_ORDER}

    def select(self, dimension, value: str) -> bool:
        """Set a selection. Returns False when the value was already active."""
        dimension = Dimension(dimension)
        if self._selections[dimension] == value:
            return False

        logger.info(f"Selecting {dimension.value}={value!r}")
        if dimension in CASCADING_DIMENSIONS:
            self._cascade(dimension)
        self._selections[dimension] = value
        self.refresh()
        return True

    def _cascade(self, dimension: Dimension) -> None:
        exempt = CASCADE_EXEMPT[self.view_mode]
        for inner in DIMENSION_ORDER[DIMENSION_ORDER.index(dimension) + 1:]:
            if inner not in exempt:
                self._selections[inner] = ALL
        if self.view_mode is ViewMode.LIST:
            self.sort_order = SortOrder.DESC

    def set_sort_order(self, order) -> None:
        self.sort_order = SortOrder(order)

    def set_view_mode(self, mode) -> bool:
        """Switch view mode, resetting every filter. Returns False when already active."""
        mode = ViewMode(mode)
        if mode is self.view_mode:
            return False
        logger.info(f"Switching view mode to {mode.value}")
        self.view_mode = mode
        self.reset()
        return True

    def reset(self) -> None:
        for dimension in DIMENSION_ORDER:
            self._selections[dimension] = ALL
        self.sort_order = SortOrder.DESC

    def refresh(self) -> None:
        """Force every selection that left its live option set back to "all"."""
        for dimension in DIMENSION_ORDER:
            value = self._selections[dimension]
            if value != ALL and value not in self.options(dimension):
                logger.info(f"Selection {dimension.value}={value!r} no longer available, resetting")
                self._selections[dimension] = ALL

    def apply(self, selections: Dict[str, Optional[str]], order: Optional[str] = None) -> None:
        """Apply several selections outer to inner, then the sort order."""
        for dimension in DIMENSION_ORDER:
            value = selections.get(dimension.value)
            if value is not None:
                self.select(dimension, value)
        if order is not None:
            self.set_sort_order(order)
