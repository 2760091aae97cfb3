"""
Per-model accuracy aggregation and summary statistics.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from .models import BenchmarkRecord, BenchmarkScore, DetailEntry, ModelAverage, Summary
from .resolvers import resolve_benchmark, resolve_model_name, resolve_task, resolve_technique

logger = logging.getLogger(__name__)

MAX_DETAIL_BENCHMARKS = 10
TOP_RECORDS = 3


@dataclass
class _ModelAccumulator:
    model_name: str
    total: float = 0.0
    count: int = 0
    best: Optional[BenchmarkScore] = None
    worst: Optional[BenchmarkScore] = None

    def add(self, benchmark: str, accuracy: float) -> None:
        self.total += accuracy
        self.count += 1
        # Strict comparisons: the first record seen wins exact ties
        if self.best is None or accuracy > self.best.accuracy:
            self.best = BenchmarkScore(benchmark=benchmark, accuracy=accuracy)
        if self.worst is None or accuracy < self.worst.accuracy:
            self.worst = BenchmarkScore(benchmark=benchmark, accuracy=accuracy)


def clamp_accuracy(value: float) -> float:
    """Clamp an accuracy into [0, 100] for display."""
    return max(0.0, min(float(value), 100.0))


def compute_model_averages(records: Sequence[BenchmarkRecord]) -> List[ModelAverage]:
    """Mean raw accuracy per model, in order of first appearance."""
    accumulators: Dict[str, _ModelAccumulator] = {}
    for record in records:
        model_name = resolve_model_name(record)
        accumulator = accumulators.get(model_name)
        if accumulator is None:
            accumulator = accumulators[model_name] = _ModelAccumulator(model_name=model_name)
        accumulator.add(resolve_benchmark(record), record.accuracy_percent)

    averages = [
        ModelAverage(
            model_name=acc.model_name,
            average=acc.total / acc.count if acc.count else 0.0,
            benchmark_count=acc.count,
            best=acc.best,
            worst=acc.worst,
        )
        for acc in accumulators.values()
    ]
    logger.info(f"Computed averages for {len(averages)} models over {len(records)} records")
    return averages


def rank_model_averages(averages: Sequence[ModelAverage]) -> List[ModelAverage]:
    """Averages sorted from best to worst; equal averages keep their order."""
    return sorted(averages, key=lambda entry: entry.average, reverse=True)


def select_top_model(averages: Sequence[ModelAverage]) -> Optional[ModelAverage]:
    """Model with the highest average; the first one wins ties."""
    top: Optional[ModelAverage] = None
    for entry in averages:
        if top is None or entry.average > top.average:
            top = entry
    return top


def model_detail(
    records: Sequence[BenchmarkRecord],
    model_name: str,
    limit: int = MAX_DETAIL_BENCHMARKS
) -> List[DetailEntry]:
    """Benchmarks of one model sorted by clamped accuracy, at most ``limit`` entries."""
    entries = [
        DetailEntry(
            id=record.id,
            benchmark_name=resolve_benchmark(record),
            task=resolve_task(record),
            technique=resolve_technique(record),
            accuracy=clamp_accuracy(record.accuracy_percent),
            created_at=record.created_at,
            correct=record.correct,
            total=record.total,
        )
        for record in records
        if resolve_model_name(record) == model_name
    ]
    entries.sort(key=lambda entry: entry.accuracy, reverse=True)
    return entries[:limit]


def top_records(records: Sequence[BenchmarkRecord], n: int = TOP_RECORDS) -> List[BenchmarkRecord]:
    return sorted(records, key=lambda record: record.accuracy_percent, reverse=True)[:n]


def compute_summary(records: Sequence[BenchmarkRecord], model_count: int) -> Summary:
    """Counters over the filtered records."""
    count = len(records)
    average = sum(record.accuracy_percent for record in records) / count if count else 0.0
    return Summary(
        count=count,
        average_accuracy=average,
        model_count=model_count,
        top_records=top_records(records),
    )
