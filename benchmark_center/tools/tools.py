"""
MCP tools for exploring benchmark results.
"""

from typing import Annotated, Any, Dict, List, Literal, Optional

from mcp.types import ToolAnnotations
from pydantic import BaseModel, ConfigDict, Field

from benchmark_center.packages.explorer import (
    ALL,
    BenchmarkRecord,
    DetailEntry,
    ExplorerSession,
    ModelAverage,
    Notice,
    RecordingNotifier,
    primary_answer_type,
)

FILTER_OPTIONS_TOOL_NAME = 'filter_options'
LIST_BENCHMARKS_TOOL_NAME = 'list_benchmarks'
MODEL_AVERAGES_TOOL_NAME = 'model_averages'
EXPORT_BENCHMARKS_TOOL_NAME = 'export_benchmarks'

TaskArg = Annotated[str, Field(description="Training task to filter by, or 'all'.")]
ModelFamilyArg = Annotated[str, Field(description="Model family to filter by, or 'all'.")]
ModelArg = Annotated[str, Field(description="Model (run key) to filter by, or 'all'.")]
TechniqueArg = Annotated[str, Field(description="Training technique to filter by, or 'all'.")]
BenchmarkArg = Annotated[str, Field(description="Benchmark to filter by, or 'all'.")]
OrderArg = Annotated[Literal["desc", "asc"], Field(description="Accuracy ranking order.")]


class NoticeItem(BaseModel):
    """User-visible notice raised while running a tool."""
    title: str
    description: str
    severity: str

    @classmethod
    def from_notice(cls, notice: Notice) -> "NoticeItem":
        return cls(title=notice.title, description=notice.description, severity=notice.severity.value)


class AnswerTypeItem(BaseModel):
    label: str
    stats: Dict[str, Any]


class BenchmarkItem(BaseModel):
    """Benchmark result as returned by the tools."""
    model_config = ConfigDict(protected_namespaces=())

    id: str
    model_name: str
    model_family: Optional[str] = None
    task: Optional[str] = None
    technique: Optional[str] = None
    benchmark_name: str
    accuracy_percent: float
    correct: int
    total: int
    mode: str
    created_at: Optional[str] = None
    primary_answer_type: Optional[AnswerTypeItem] = Field(
        None, description="First answer-type category with its stats"
    )

    @classmethod
    def from_record(cls, record: BenchmarkRecord) -> "BenchmarkItem":
        answer_type = primary_answer_type(record)
        return cls(
            id=record.id,
            model_name=record.model_name,
            model_family=record.model_family,
            task=record.task,
            technique=record.technique,
            benchmark_name=record.benchmark_name,
            accuracy_percent=record.accuracy_percent,
            correct=record.correct,
            total=record.total,
            mode=record.mode,
            created_at=record.created_at,
            primary_answer_type=AnswerTypeItem(label=answer_type[0], stats=answer_type[1]) if answer_type else None,
        )


class ScoreItem(BaseModel):
    benchmark: str
    accuracy: float


class ModelAverageItem(BaseModel):
    """Average accuracy of one model."""
    model_config = ConfigDict(protected_namespaces=())

    model_name: str
    average: float
    benchmark_count: int
    best: Optional[ScoreItem] = None
    worst: Optional[ScoreItem] = None

    @classmethod
    def from_average(cls, entry: ModelAverage) -> "ModelAverageItem":
        return cls(
            model_name=entry.model_name,
            average=entry.average,
            benchmark_count=entry.benchmark_count,
            best=ScoreItem(benchmark=entry.best.benchmark, accuracy=entry.best.accuracy) if entry.best else None,
            worst=ScoreItem(benchmark=entry.worst.benchmark, accuracy=entry.worst.accuracy) if entry.worst else None,
        )


class DetailItem(BaseModel):
    id: str
    benchmark_name: str
    task: str
    technique: str
    accuracy: float = Field(description="Accuracy clamped to [0, 100]")

    @classmethod
    def from_entry(cls, entry: DetailEntry) -> "DetailItem":
        return cls(
            id=entry.id,
            benchmark_name=entry.benchmark_name,
            task=entry.task,
            technique=entry.technique,
            accuracy=entry.accuracy,
        )


class FilterOptionsResults(BaseModel):
    """Active selections and the values each filter currently accepts."""
    selections: Dict[str, str]
    options: Dict[str, List[str]]
    notices: List[NoticeItem] = Field(default_factory=list)


class BenchmarkPage(BaseModel):
    """One page of the filtered benchmark list."""
    benchmarks: List[BenchmarkItem]
    page: int
    total_pages: int
    page_start: int
    page_end: int
    total: int = Field(description="Number of benchmarks matching the filters")
    average_accuracy: float
    model_count: int
    top_benchmarks: List[BenchmarkItem]
    selections: Dict[str, str]
    notices: List[NoticeItem] = Field(default_factory=list)


class ModelAveragesResults(BaseModel):
    """Per-model averages, best first, with the detail of the top model."""
    averages: List[ModelAverageItem]
    top_model: Optional[str] = None
    top_model_benchmarks: List[DetailItem] = Field(default_factory=list)
    selections: Dict[str, str]
    notices: List[NoticeItem] = Field(default_factory=list)


class ExportResults(BaseModel):
    """Outcome of an export; path is empty when nothing was exported."""
    path: Optional[str] = None
    format: str
    count: int
    notices: List[NoticeItem] = Field(default_factory=list)


class ExplorerTool():
    def __init__(self, session: ExplorerSession, notifier: RecordingNotifier):
        self.annotations = ToolAnnotations(title=self.title, readOnlyHint=True)
        self.structured_output = True
        self.session = session
        self.notifier = notifier

    def _drain_notices(self) -> List[NoticeItem]:
        return [NoticeItem.from_notice(notice) for notice in self.notifier.drain()]


class FilterOptionsTool(ExplorerTool):
    name = FILTER_OPTIONS_TOOL_NAME
    title = 'Benchmark filter options'
    description = ('List the values accepted by each benchmark filter. Each filter is narrowed '
                   'by the filters before it: task, model_family, model, technique, benchmark.')

    def execute(
        self,
        task: TaskArg = ALL,
        model_family: ModelFamilyArg = ALL,
        model: ModelArg = ALL,
        technique: TechniqueArg = ALL,
    ) -> FilterOptionsResults:
        """List filter values given the outer selections."""
        self.session.apply_filters(
            task=task, model_family=model_family, model=model, technique=technique, benchmark=ALL
        )
        return FilterOptionsResults(
            selections=self.session.filters.selections,
            options=self.session.filters.all_options(),
            notices=self._drain_notices(),
        )


class ListBenchmarksTool(ExplorerTool):
    name = LIST_BENCHMARKS_TOOL_NAME
    title = 'List benchmark results'
    description = 'List benchmark results matching the filters, ranked by accuracy, five per page.'

    def execute(
        self,
        task: TaskArg = ALL,
        model_family: ModelFamilyArg = ALL,
        model: ModelArg = ALL,
        technique: TechniqueArg = ALL,
        benchmark: BenchmarkArg = ALL,
        order: OrderArg = "desc",
        page: Annotated[int, Field(description="1-based page number; clamped to the available pages.")] = 1,
    ) -> BenchmarkPage:
        """List one page of filtered benchmark results."""
        self.session.apply_filters(
            view_mode="list",
            task=task,
            model_family=model_family,
            model=model,
            technique=technique,
            benchmark=benchmark,
            order=order,
        )
        self.session.go_to_page(page)
        pager = self.session.pager
        summary = self.session.summary()
        return BenchmarkPage(
            benchmarks=[BenchmarkItem.from_record(record) for record in self.session.page()],
            page=pager.current_page if not pager.disabled else 0,
            total_pages=pager.total_pages,
            page_start=pager.page_start,
            page_end=pager.page_end,
            total=summary.count,
            average_accuracy=summary.average_accuracy,
            model_count=summary.model_count,
            top_benchmarks=[BenchmarkItem.from_record(record) for record in summary.top_records],
            selections=self.session.filters.selections,
            notices=self._drain_notices(),
        )


class ModelAveragesTool(ExplorerTool):
    name = MODEL_AVERAGES_TOOL_NAME
    title = 'Average accuracy per model'
    description = ('Average accuracy of each model across its benchmarks, with its best and worst '
                   'benchmark. The benchmark filter does not apply to averages.')

    def execute(
        self,
        task: TaskArg = ALL,
        model_family: ModelFamilyArg = ALL,
        model: ModelArg = ALL,
        technique: TechniqueArg = ALL,
    ) -> ModelAveragesResults:
        """Compute per-model averages for the filtered benchmarks."""
        self.session.apply_filters(
            view_mode="aggregate",
            task=task,
            model_family=model_family,
            model=model,
            technique=technique,
            benchmark=ALL,
        )
        top = self.session.top_model()
        return ModelAveragesResults(
            averages=[ModelAverageItem.from_average(entry) for entry in self.session.model_averages()],
            top_model=top.model_name if top else None,
            top_model_benchmarks=[DetailItem.from_entry(entry) for entry in self.session.top_model_detail()],
            selections=self.session.filters.selections,
            notices=self._drain_notices(),
        )


class ExportBenchmarksTool(ExplorerTool):
    name = EXPORT_BENCHMARKS_TOOL_NAME
    title = 'Export benchmark results'
    description = 'Write the filtered, ranked benchmark list to a JSON or CSV file.'

    def __init__(self, session: ExplorerSession, notifier: RecordingNotifier):
        super().__init__(session, notifier)
        self.annotations = ToolAnnotations(title=self.title, readOnlyHint=False)

    def execute(
        self,
        format: Annotated[Literal["json", "csv"], Field(description="Export file format.")] = "json",
        task: TaskArg = ALL,
        model_family: ModelFamilyArg = ALL,
        model: ModelArg = ALL,
        technique: TechniqueArg = ALL,
        benchmark: BenchmarkArg = ALL,
        order: OrderArg = "desc",
    ) -> ExportResults:
        """Export the filtered benchmark list."""
        self.session.apply_filters(
            view_mode="list",
            task=task,
            model_family=model_family,
            model=model,
            technique=technique,
            benchmark=benchmark,
            order=order,
        )
        result = self.session.export(format)
        return ExportResults(
            path=result.path if result else None,
            format=format,
            count=result.count if result else 0,
            notices=self._drain_notices(),
        )


def build_tools(session: ExplorerSession, notifier: RecordingNotifier) -> List[ExplorerTool]:
    return [
        FilterOptionsTool(session, notifier),
        ListBenchmarksTool(session, notifier),
        ModelAveragesTool(session, notifier),
        ExportBenchmarksTool(session, notifier),
    ]
