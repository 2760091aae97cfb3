"""
Data models for the benchmark explorer.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

# Selection value meaning "no filter on this dimension"
ALL = "all"

# Mode recorded when a task detail does not declare one
UNKNOWN_MODE = "unknown"


class Dimension(str, Enum):
    TASK = "task"
    MODEL_FAMILY = "model_family"
    MODEL = "model"
    TECHNIQUE = "technique"
    BENCHMARK = "benchmark"


class ViewMode(str, Enum):
    LIST = "list"
    AGGREGATE = "aggregate"


class SortOrder(str, Enum):
    DESC = "desc"
    ASC = "asc"


class Severity(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class RunKeyParts:
    """Segments of a run key split on the double-underscore separator."""
    parts: Tuple[str, ...]

    def part(self, index: int) -> Optional[str]:
        if index < len(self.parts):
            return self.parts[index]
        return None

    @property
    def training_task(self) -> Optional[str]:
        return self.part(0)

    @property
    def model_family(self) -> Optional[str]:
        return self.part(1)

    @property
    def benchmark(self) -> Optional[str]:
        return self.part(2)


@dataclass(frozen=True)
class BenchmarkRecord:
    """One evaluation result of one run on one benchmark."""
    id: str
    model_path: str
    model_name: str
    model_family: Optional[str]
    task: Optional[str]
    technique: Optional[str]
    benchmark_name: str
    created_at: Optional[str]
    total: int
    correct: int
    accuracy_percent: Union[int, float]
    by_answer_type: Optional[Dict[str, Any]]
    mode: str = UNKNOWN_MODE
    generated_max_new_tokens: Optional[Union[int, float]] = None
    stop_on_answer: Optional[bool] = None
    runtime_seconds: Optional[Union[int, float]] = None
    avg_seconds_per_example: Optional[Union[int, float]] = None
    out_dir: Optional[str] = None
    val_json: str = ""


@dataclass(frozen=True)
class BenchmarkScore:
    """A benchmark label paired with the accuracy a model reached on it."""
    benchmark: str
    accuracy: float


@dataclass
class ModelAverage:
    """Mean accuracy of one model across the benchmarks it was evaluated on."""
    model_name: str
    average: float
    benchmark_count: int
    best: Optional[BenchmarkScore]
    worst: Optional[BenchmarkScore]


@dataclass
class DetailEntry:
    """Row of the per-model detail list; accuracy is clamped to [0, 100]."""
    id: str
    benchmark_name: str
    task: str
    technique: str
    accuracy: float
    created_at: Optional[str]
    correct: int
    total: int


@dataclass
class Summary:
    """Counters shown above the list view."""
    count: int
    average_accuracy: float
    model_count: int
    top_records: List[BenchmarkRecord] = field(default_factory=list)


@dataclass(frozen=True)
class Notice:
    """User-visible signal emitted through a Notifier."""
    title: str
    description: str
    severity: Severity = Severity.INFO


@dataclass(frozen=True)
class ExportResult:
    """Outcome of a successful export."""
    path: str
    format: str
    count: int
