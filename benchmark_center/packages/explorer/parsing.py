"""
Typed parsing of raw task details with defaults.

Every field of a task detail resolves through one validator to a value of
its declared type or to the field default.
"""

import logging
import math
from collections.abc import Mapping
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator

from .models import UNKNOWN_MODE

logger = logging.getLogger(__name__)

Number = Union[int, float]

# Integral values below this bound are written without a fractional part
_MAX_EXACT_INTEGER = 2 ** 53


def _finite_number(value: Any) -> Optional[Number]:
    """Numeric value of a JSON number or numeric string, None when there is none.

    Whole numbers come back as int so exports write ``58`` rather than ``58.0``.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if abs(value) < _MAX_EXACT_INTEGER else _finite_float(value)
    if isinstance(value, float):
        number = value
    elif isinstance(value, str) and value.strip():
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    if number.is_integer() and abs(number) < _MAX_EXACT_INTEGER:
        return int(number)
    return number


def _finite_float(value: int) -> Optional[float]:
    try:
        return float(value)
    except OverflowError:
        return None


def to_number(value: Any) -> Number:
    """Coerce a JSON value to a finite number, falling back to 0."""
    number = _finite_number(value)
    return 0 if number is None else number


def clean_json_value(value: Any) -> Any:
    """Copy of a nested JSON value with NaN and infinities replaced by None."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, Mapping):
        return {key: clean_json_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [clean_json_value(item) for item in value]
    return value


def is_absent(value: Any) -> bool:
    """True for the empty values a run may hold in place of a task detail."""
    if value is None or value is False or value == "":
        return True
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0 or (isinstance(value, float) and math.isnan(value))
    return False


class TaskDetail(BaseModel):
    """Result block of one benchmark inside a run."""
    model_config = ConfigDict(extra="ignore")

    total: int = 0
    correct: int = 0
    accuracy_percent: Number = 0
    by_answer_type: Optional[Dict[Any, Any]] = None
    model: str = ""
    val_json: str = ""
    mode: str = UNKNOWN_MODE
    generated_max_new_tokens: Optional[Number] = None
    stop_on_answer: Optional[bool] = None
    runtime_seconds: Optional[Number] = None
    avg_seconds_per_example: Optional[Number] = None
    out_dir: Optional[str] = None
    created_at: Optional[str] = None

    @field_validator("total", "correct", mode="before")
    @classmethod
    def coerce_count(cls, v: Any) -> int:
        # Counts are never negative
        return max(0, int(to_number(v)))

    @field_validator("accuracy_percent", mode="before")
    @classmethod
    def coerce_accuracy(cls, v: Any) -> Number:
        return to_number(v)

    @field_validator("by_answer_type", mode="before")
    @classmethod
    def coerce_mapping(cls, v: Any) -> Optional[Dict[Any, Any]]:
        if isinstance(v, Mapping):
            return clean_json_value(v)
        return None

    @field_validator("model", "val_json", mode="before")
    @classmethod
    def coerce_path(cls, v: Any) -> str:
        return v if isinstance(v, str) else ""

    @field_validator("mode", mode="before")
    @classmethod
    def coerce_mode(cls, v: Any) -> str:
        return v if isinstance(v, str) else UNKNOWN_MODE

    @field_validator("out_dir", "created_at", mode="before")
    @classmethod
    def coerce_optional_text(cls, v: Any) -> Optional[str]:
        return v if isinstance(v, str) else None

    @field_validator("generated_max_new_tokens", "runtime_seconds", "avg_seconds_per_example", mode="before")
    @classmethod
    def coerce_optional_number(cls, v: Any) -> Optional[Number]:
        return _finite_number(v)

    @field_validator("stop_on_answer", mode="before")
    @classmethod
    def coerce_optional_bool(cls, v: Any) -> Optional[bool]:
        return v if isinstance(v, bool) else None


def parse_task_detail(raw: Any) -> Optional[TaskDetail]:
    """Parse a raw task detail, returning None when it is absent.

    A present value that is not a mapping carries no fields and parses to the defaults.
    """
    if is_absent(raw):
        return None
    if not isinstance(raw, Mapping):
        logger.warning(f"Task detail of type {type(raw).__name__} has no fields, using defaults")
        return TaskDetail()
    return TaskDetail.model_validate(dict(raw))
