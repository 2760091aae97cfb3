"""
Benchmark Explorer

Normalizes nested evaluation-results documents into flat benchmark records and
serves cascading filters, per-model averages, pagination and file exports
over them.
"""

from .aggregation import compute_model_averages, compute_summary, model_detail, select_top_model
from .exporter import ExportFormat, Exporter
from .filters import DIMENSION_ORDER, FilterEngine
from .inference import (
    benchmark_from_val_json_path,
    decompose_run_key,
    model_name_from_path,
    task_from_val_json_path,
    technique_from_model_path,
)
from .models import (
    ALL,
    BenchmarkRecord,
    BenchmarkScore,
    DetailEntry,
    Dimension,
    ExportResult,
    ModelAverage,
    Notice,
    Severity,
    SortOrder,
    Summary,
    ViewMode,
)
from .normalizer import normalize
from .notifications import LoggingNotifier, Notifier, RecordingNotifier
from .pager import PAGE_SIZE, Pager
from .resolvers import primary_answer_type
from .session import ExplorerSession
from .store import BenchmarkStore

__all__ = [
    "ALL",
    "BenchmarkRecord",
    "BenchmarkScore",
    "DetailEntry",
    "Dimension",
    "ExportResult",
    "ModelAverage",
    "Notice",
    "Severity",
    "SortOrder",
    "Summary",
    "ViewMode",
    "decompose_run_key",
    "model_name_from_path",
    "task_from_val_json_path",
    "technique_from_model_path",
    "benchmark_from_val_json_path",
    "normalize",
    "primary_answer_type",
    "BenchmarkStore",
    "DIMENSION_ORDER",
    "FilterEngine",
    "compute_model_averages",
    "compute_summary",
    "model_detail",
    "select_top_model",
    "PAGE_SIZE",
    "Pager",
    "ExportFormat",
    "Exporter",
    "Notifier",
    "LoggingNotifier",
    "RecordingNotifier",
    "ExplorerSession",
]
