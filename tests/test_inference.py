"""Tests for run key and path heuristics."""

import pytest

from benchmark_center.packages.explorer.inference import (
    TECHNIQUE_BASE,
    benchmark_from_val_json_path,
    decompose_run_key,
    model_name_from_path,
    task_from_val_json_path,
    technique_from_model_path,
)


class TestDecomposeRunKey:
    def test_three_parts(self):
        parts = decompose_run_key("aqua_rat__gemma-3-4b-it__mmlu")
        assert parts.training_task == "aqua_rat"
        assert parts.model_family == "gemma-3-4b-it"
        assert parts.benchmark == "mmlu"

    def test_missing_parts_are_none(self):
        parts = decompose_run_key("aqua_rat")
        assert parts.training_task == "aqua_rat"
        assert parts.model_family is None
        assert parts.benchmark is None

    def test_empty_segments_dropped(self):
        assert decompose_run_key("__aqua_rat____gemma").parts == ("aqua_rat", "gemma")

    @pytest.mark.parametrize("key", [None, "", 42])
    def test_malformed(self, key):
        assert decompose_run_key(key).parts == ()


class TestModelNameFromPath:
    def test_segment_after_marker(self):
        assert model_name_from_path("/x/grpo/gemma/aqua_rat/merged_fp16") == "gemma"

    def test_marker_is_case_insensitive(self):
        assert model_name_from_path("/x/LoRA/llama-3-8b/run") == "llama-3-8b"

    def test_skips_candidate_with_dot(self):
        # "outputs" is followed by a dotted segment, "lora" is not
        path = "/home/outputs/v1.2/lora/phi-4/merged"
        assert model_name_from_path(path) == "phi-4"

    def test_dotted_candidate_after_marker_falls_back(self):
        assert model_name_from_path("/x/LoRA/llama-3.1-8b/run") == "run"

    def test_falls_back_to_last_dot_free_segment(self):
        assert model_name_from_path("/models/mistral-7b/weights.bin") == "mistral-7b"

    def test_marker_as_last_segment(self):
        assert model_name_from_path("/models/outputs") == "outputs"

    @pytest.mark.parametrize("path", [None, "", "/", "a.b/c.d"])
    def test_nothing_found(self, path):
        assert model_name_from_path(path) is None


class TestTaskFromValJson:
    def test_segment_after_tasks(self):
        assert task_from_val_json_path("/x/tasks/aqua_rat/val.json") == "aqua_rat"

    def test_tasks_is_case_insensitive(self):
        assert task_from_val_json_path("/x/Tasks/gsm8k/val.json") == "gsm8k"

    def test_file_stem_fallback(self):
        assert task_from_val_json_path("/data/strategy_qa.val.json") == "strategy_qa"

    def test_tasks_as_last_segment(self):
        assert task_from_val_json_path("/data/tasks") == "tasks"

    @pytest.mark.parametrize("path", [None, "", "///"])
    def test_missing(self, path):
        assert task_from_val_json_path(path) is None


class TestTechniqueFromModelPath:
    @pytest.mark.parametrize("path, expected", [
        ("/x/grpo/lora/model", "Lora+GRPO"),
        ("/x/GRPO_QLoRA/model", "Lora+GRPO"),
        ("/x/grpo/gemma/merged", "GRPO"),
        ("/x/qlora/llama/merged", "Lora/QLora"),
        ("/x/lora/llama/merged", "Lora/QLora"),
        ("/x/base/mistral/merged", TECHNIQUE_BASE),
    ])
    def test_priority(self, path, expected):
        assert technique_from_model_path(path) == expected

    @pytest.mark.parametrize("path", [None, ""])
    def test_missing(self, path):
        assert technique_from_model_path(path) is None


class TestBenchmarkFromValJson:
    def test_prefers_benchmarks(self):
        assert benchmark_from_val_json_path("/x/tasks/aqua/benchmarks/mmlu/val.json") == "mmlu"

    def test_then_tasks(self):
        assert benchmark_from_val_json_path("/x/tasks/aqua_rat/val.json") == "aqua_rat"

    def test_then_stem(self):
        assert benchmark_from_val_json_path("/x/bbh.json") == "bbh"

    def test_missing(self):
        assert benchmark_from_val_json_path(None) is None
