"""
Flattening of the nested evaluation-results document into benchmark records.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any, List

from .inference import (
    decompose_run_key,
    model_name_from_path,
    task_from_val_json_path,
    technique_from_model_path,
)
from .models import BenchmarkRecord
from .parsing import TaskDetail, parse_task_detail

logger = logging.getLogger(__name__)

ID_SEPARATOR = "__"


def _build_record(run_key: str, task_name: str, detail: TaskDetail) -> BenchmarkRecord:
    run_parts = decompose_run_key(run_key)
    model_family = run_parts.model_family or model_name_from_path(detail.model)
    task = run_parts.training_task or task_from_val_json_path(detail.val_json)

    return BenchmarkRecord(
        id=f"{run_key}{ID_SEPARATOR}{task_name}",
        model_path=detail.model,
        model_name=run_key,
        model_family=model_family,
        task=task,
        technique=technique_from_model_path(detail.model),
        benchmark_name=task_name,
        created_at=detail.created_at,
        total=detail.total,
        correct=detail.correct,
        accuracy_percent=detail.accuracy_percent,
        by_answer_type=detail.by_answer_type,
        mode=detail.mode,
        generated_max_new_tokens=detail.generated_max_new_tokens,
        stop_on_answer=detail.stop_on_answer,
        runtime_seconds=detail.runtime_seconds,
        avg_seconds_per_example=detail.avg_seconds_per_example,
        out_dir=detail.out_dir,
        val_json=detail.val_json,
    )


def normalize(document: Any) -> List[BenchmarkRecord]:
    """Turn a raw evaluation-results document into records, in document order.

    A missing or malformed ``eval_results`` field yields an empty list.
    """
    if not isinstance(document, Mapping):
        logger.warning(f"Expected a mapping document, got {type(document).__name__}")
        return []

    entries = document.get("eval_results")
    if not isinstance(entries, Sequence) or isinstance(entries, (str, bytes)):
        logger.warning("Document has no usable 'eval_results' list")
        return []

    records: List[BenchmarkRecord] = []
    for entry_index, entry in enumerate(entries):
        if not isinstance(entry, Mapping):
            logger.warning(f"Skipping eval_results[{entry_index}]: not a mapping")
            continue

        for run_key, run_tasks in entry.items():
            if not isinstance(run_tasks, Mapping):
                logger.warning(f"Skipping run '{run_key}': tasks are not a mapping")
                continue

            for task_name, raw_detail in run_tasks.items():
                detail = parse_task_detail(raw_detail)
                if detail is None:
                    continue
                records.append(_build_record(str(run_key), str(task_name), detail))

    logger.info(f"Normalized {len(records)} benchmark records from {len(entries)} entries")
    return records
