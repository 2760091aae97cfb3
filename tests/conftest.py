"""Shared fixtures for the benchmark explorer tests."""

from datetime import datetime, timezone

import pytest

from benchmark_center.packages.explorer import ExplorerSession, Exporter, RecordingNotifier

FIXED_NOW = datetime(2025, 10, 18, 12, 30, 45, 123000, tzinfo=timezone.utc)


def make_task(accuracy, model, val_json="/data/tasks/aqua_rat/val.json", **extra):
    detail = {
        "total": 100,
        "correct": int(accuracy),
        "accuracy_percent": accuracy,
        "by_answer_type": {"mcq": {"total": 100, "correct": int(accuracy), "acc": accuracy}},
        "model": model,
        "val_json": val_json,
        "mode": "concise_cot",
        "generated_max_new_tokens": 512,
        "stop_on_answer": False,
        "runtime_seconds": 2002.94,
        "avg_seconds_per_example": 20.029,
        "out_dir": "/home/user/models/outputs/eval",
        "created_at": "2025-10-10T09:00:00Z",
    }
    detail.update(extra)
    return detail


def make_document():
    return {
        "eval_results": [
            {
                "aqua_rat__gemma-3-4b-it": {
                    "mmlu": make_task(62.5, "/m/outputs/grpo/gemma-3-4b-it/aqua_rat/merged_fp16"),
                    "bbh": make_task(48.0, "/m/outputs/grpo/gemma-3-4b-it/aqua_rat/merged_fp16"),
                },
            },
            {
                "gsm8k__Phi-4-mini-instruct": {
                    "mmlu": make_task(71.3, "/m/outputs/lora/Phi-4-mini-instruct/gsm8k/merged_fp16"),
                    "bbh": make_task(40.0, "/m/outputs/lora/Phi-4-mini-instruct/gsm8k/merged_fp16"),
                },
                "gsm8k__gemma-3-4b-it": {
                    "mmlu": make_task(55.0, "/m/outputs/grpo/gemma-3-4b-it/gsm8k/lora_adapter"),
                    "gpqa": make_task(30.0, "/m/outputs/grpo/gemma-3-4b-it/gsm8k/lora_adapter"),
                },
            },
            {
                "esnli__Llama-3.2-3B-Instruct": {
                    "mmlu": make_task(80.0, "/m/base/Llama-3.2-3B-Instruct/merged_fp16"),
                },
            },
        ]
    }


@pytest.fixture
def document():
    return make_document()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def session(tmp_path, notifier, document):
    exporter = Exporter(str(tmp_path / "exports"), notifier, clock=lambda: FIXED_NOW)
    session = ExplorerSession(notifier=notifier, exporter=exporter)
    session.load_document(document)
    return session
