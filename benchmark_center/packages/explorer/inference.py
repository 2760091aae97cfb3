"""
Heuristics that recover run dimensions from naming conventions.

Run keys look like ``{training_task}__{model_family}__{benchmark}`` and model
or dataset paths follow the layout of the training workspace, e.g.
``/.../outputs/grpo/gemma-3-4b-it/aqua_rat/merged_fp16`` and
``/.../data/tasks/aqua_rat/val.json``. All functions are total: malformed or
missing input gives None (or the base technique label), never an exception.
"""

from typing import Any, List, Optional

from .models import RunKeyParts

RUN_KEY_SEPARATOR = "__"

# Path segments that are followed by the model directory
MODEL_MARKER_SEGMENTS = ("grpo", "lora", "qlora", "outputs")

TECHNIQUE_LORA_GRPO = "Lora+GRPO"
TECHNIQUE_GRPO = "GRPO"
TECHNIQUE_LORA = "Lora/QLora"
TECHNIQUE_BASE = "Base model"


def _path_segments(path: Any) -> List[str]:
    if not isinstance(path, str) or not path:
        return []
    return [segment for segment in path.split("/") if segment]


def _segment_after(segments: List[str], marker: str) -> Optional[str]:
    for index, segment in enumerate(segments[:-1]):
        if segment.lower() == marker:
            return segments[index + 1]
    return None


def _file_stem(segments: List[str]) -> Optional[str]:
    if not segments:
        return None
    stem = segments[-1].split(".")[0]
    return stem or None


def decompose_run_key(key: Any) -> RunKeyParts:
    """Split a run key into its non-empty double-underscore separated parts."""
    if not isinstance(key, str) or not key:
        return RunKeyParts(parts=())
    return RunKeyParts(parts=tuple(part for part in key.split(RUN_KEY_SEPARATOR) if part))


def model_name_from_path(path: Any) -> Optional[str]:
    """Guess the model directory name from a model checkpoint path."""
    segments = _path_segments(path)
    for index, segment in enumerate(segments[:-1]):
        if segment.lower() in MODEL_MARKER_SEGMENTS:
            candidate = segments[index + 1]
            if "." not in candidate:
                return candidate

    dot_free = [segment for segment in segments if "." not in segment]
    return dot_free[-1] if dot_free else None


def task_from_val_json_path(path: Any) -> Optional[str]:
    """Training task from a validation file path: the segment after ``tasks`` or the file stem."""
    segments = _path_segments(path)
    task = _segment_after(segments, "tasks")
    if task is not None:
        return task
    return _file_stem(segments)


def technique_from_model_path(path: Any) -> Optional[str]:
    """Training technique from a model path.

    The combined GRPO + LoRA check must come first, since both single checks
    would also match such a path.
    """
    if not isinstance(path, str) or not path:
        return None
    lower = path.lower()
    # "qlora" contains "lora"
    has_lora = "lora" in lower
    has_grpo = "grpo" in lower
    if has_grpo and has_lora:
        return TECHNIQUE_LORA_GRPO
    if has_grpo:
        return TECHNIQUE_GRPO
    if has_lora:
        return TECHNIQUE_LORA
    return TECHNIQUE_BASE


def benchmark_from_val_json_path(path: Any) -> Optional[str]:
    """Benchmark name from a validation file path."""
    segments = _path_segments(path)
    for marker in ("benchmarks", "tasks"):
        name = _segment_after(segments, marker)
        if name is not None:
            return name
    return _file_stem(segments)
