"""
Resolution of the filter dimensions of a record.

Each dimension falls back through the record field, the run key, the paths
and finally a sentinel label.
"""

from collections.abc import Mapping
from typing import Any, Callable, Dict, Optional, Tuple

from .inference import (
    benchmark_from_val_json_path,
    decompose_run_key,
    model_name_from_path,
    task_from_val_json_path,
    technique_from_model_path,
)
from .models import BenchmarkRecord, Dimension

UNKNOWN_TASK = "unknown task"
UNKNOWN_FAMILY = "unknown family"
UNKNOWN_MODEL = "unknown model"
UNKNOWN_TECHNIQUE = "unknown technique"
UNKNOWN_BENCHMARK = "unknown benchmark"


def resolve_task(record: BenchmarkRecord) -> str:
    if record.task:
        return record.task
    from_run_key = decompose_run_key(record.model_name).training_task
    if from_run_key:
        return from_run_key
    return task_from_val_json_path(record.val_json) or UNKNOWN_TASK


def resolve_model_family(record: BenchmarkRecord) -> str:
    if record.model_family:
        return record.model_family
    if record.model_name:
        return decompose_run_key(record.model_name).model_family or record.model_name
    return model_name_from_path(record.model_path) or UNKNOWN_FAMILY


def resolve_model_name(record: BenchmarkRecord) -> str:
    return record.model_name or model_name_from_path(record.model_path) or UNKNOWN_MODEL


def resolve_technique(record: BenchmarkRecord) -> str:
    return record.technique or technique_from_model_path(record.model_path) or UNKNOWN_TECHNIQUE


def resolve_benchmark(record: BenchmarkRecord) -> str:
    if record.benchmark_name:
        return record.benchmark_name
    from_val_json = benchmark_from_val_json_path(record.val_json)
    if from_val_json:
        return from_val_json
    run_parts = decompose_run_key(record.model_name)
    return run_parts.benchmark or run_parts.training_task or UNKNOWN_BENCHMARK


RESOLVERS: Dict[Dimension, Callable[[BenchmarkRecord], str]] = {
    Dimension.TASK: resolve_task,
    Dimension.MODEL_FAMILY: resolve_model_family,
    Dimension.MODEL: resolve_model_name,
    Dimension.TECHNIQUE: resolve_technique,
    Dimension.BENCHMARK: resolve_benchmark,
}

SENTINELS: Dict[Dimension, str] = {
    Dimension.TASK: UNKNOWN_TASK,
    Dimension.MODEL_FAMILY: UNKNOWN_FAMILY,
    Dimension.MODEL: UNKNOWN_MODEL,
    Dimension.TECHNIQUE: UNKNOWN_TECHNIQUE,
    Dimension.BENCHMARK: UNKNOWN_BENCHMARK,
}


def resolve(dimension: Dimension, record: BenchmarkRecord) -> str:
    """Resolved value of one dimension for a record."""
    return RESOLVERS[dimension](record)


def primary_answer_type(record: BenchmarkRecord) -> Optional[Tuple[str, Dict[str, Any]]]:
    """First answer-type category of a record with its stats, or None."""
    if not record.by_answer_type:
        return None
    label, stats = next(iter(record.by_answer_type.items()))
    if not label or not stats or not isinstance(stats, Mapping):
        return None
    return str(label), dict(stats)
