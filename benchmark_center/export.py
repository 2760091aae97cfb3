"""
Export filtered benchmark results from the command line.
"""

import argparse
import logging
from typing import List, Optional

from benchmark_center.config import Config
from benchmark_center.packages.explorer import ALL, ExplorerSession, LoggingNotifier

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(description="Export benchmark results to JSON or CSV")
    parser.add_argument("--format", choices=["json", "csv"], default="json",
                        help="Export format (default: json)")
    parser.add_argument("--results-path", help="Evaluation results JSON file (env: BENCHMARK_RESULTS_PATH)")
    parser.add_argument("--export-dir", help="Output directory (env: BENCHMARK_EXPORT_DIR)")
    parser.add_argument("--task", default=ALL, help="Training task filter")
    parser.add_argument("--model-family", default=ALL, help="Model family filter")
    parser.add_argument("--model", default=ALL, help="Model (run key) filter")
    parser.add_argument("--technique", default=ALL, help="Training technique filter")
    parser.add_argument("--benchmark", default=ALL, help="Benchmark filter")
    parser.add_argument("--order", choices=["desc", "asc"], default="desc",
                        help="Accuracy ranking order (default: desc)")
    parser.add_argument("--log-level", help="Logging level")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    overrides = {
        "results_path": args.results_path,
        "export_dir": args.export_dir,
        "log_level": args.log_level,
    }
    config = Config(**{k: v for k, v in overrides.items() if v is not None})
    logging.basicConfig(level=config.log_level)

    session = ExplorerSession(notifier=LoggingNotifier(), export_dir=config.export_dir)
    session.load_file(config.results_path)

    for dimension, value in (
        ("task", args.task),
        ("model_family", args.model_family),
        ("model", args.model),
        ("technique", args.technique),
        ("benchmark", args.benchmark),
    ):
        session.select(dimension, value)
        if value != ALL and session.filters.selection(dimension) != value:
            logger.warning(f"Ignoring {dimension} filter {value!r}: no matching benchmarks")
    session.set_sort_order(args.order)

    result = session.export(args.format)
    if result is not None:
        print(result.path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
