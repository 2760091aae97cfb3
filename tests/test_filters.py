"""Tests for the cascading filter engine."""

from dataclasses import replace

import pytest

from benchmark_center.packages.explorer import ALL, BenchmarkStore, FilterEngine, SortOrder, ViewMode
from benchmark_center.packages.explorer.resolvers import UNKNOWN_TASK, primary_answer_type


@pytest.fixture
def engine(document):
    return FilterEngine(BenchmarkStore.from_document(document))


def ids(records):
    return [record.id.split("__", 1)[1] for record in records]


class TestOptions:
    def test_task_options_known_first(self, engine):
        assert engine.options("task") == ["aqua_rat", "esnli", "gsm8k"]

    def test_benchmark_options_known_first(self, engine):
        assert engine.options("benchmark") == ["bbh", "gpqa", "mmlu"]

    def test_family_options_in_document_order(self, engine):
        assert engine.options("model_family") == [
            "gemma-3-4b-it", "Phi-4-mini-instruct", "Llama-3.2-3B-Instruct"]

    def test_techniques(self, engine):
        assert engine.options("technique") == ["GRPO", "Lora/QLora", "Lora+GRPO", "Base model"]

    def test_restricted_by_outer_selections(self, engine):
        engine.select("task", "gsm8k")
        assert engine.options("model") == ["gsm8k__Phi-4-mini-instruct", "gsm8k__gemma-3-4b-it"]
        engine.select("model_family", "gemma-3-4b-it")
        assert engine.options("model") == ["gsm8k__gemma-3-4b-it"]
        assert engine.options("technique") == ["Lora+GRPO"]
        assert engine.options("benchmark") == ["gpqa", "mmlu"]

    def test_not_restricted_by_inner_selections(self, engine):
        engine.select("technique", "GRPO")
        assert engine.options("task") == ["aqua_rat", "esnli", "gsm8k"]
        assert len(engine.options("model")) == 4

    def test_sentinels_excluded(self):
        store = BenchmarkStore.from_document({"eval_results": [{"": {"mmlu": {"accuracy_percent": 3}}}]})
        engine = FilterEngine(store)
        assert UNKNOWN_TASK not in engine.options("task")
        assert engine.options("task") == []

    def test_unknown_dimension(self, engine):
        with pytest.raises(ValueError):
            engine.options("dataset")


class TestViews:
    def test_full_and_aggregate_views(self, engine):
        engine.select("task", "gsm8k")
        engine.select("benchmark", "mmlu")
        assert ids(engine.full_view()) == ["Phi-4-mini-instruct__mmlu", "gemma-3-4b-it__mmlu"]
        assert len(engine.aggregate_view()) == 4

    def test_ordered_view_desc_and_asc(self, engine):
        accuracies = [r.accuracy_percent for r in engine.ordered_view()]
        assert accuracies == [80.0, 71.3, 62.5, 55.0, 48.0, 40.0, 30.0]
        engine.set_sort_order("asc")
        accuracies = [r.accuracy_percent for r in engine.ordered_view()]
        assert accuracies == sorted(accuracies)

    def test_ordered_view_is_stable(self):
        doc = {"eval_results": [{"r__f": {"a": {"accuracy_percent": 5}, "b": {"accuracy_percent": 5}}}]}
        engine = FilterEngine(BenchmarkStore.from_document(doc))
        assert ids(engine.ordered_view()) == ["f__a", "f__b"]
        engine.set_sort_order(SortOrder.ASC)
        assert ids(engine.ordered_view()) == ["f__a", "f__b"]


class TestCascade:
    def test_task_change_in_list_view_resets_everything(self, engine):
        engine.select("model_family", "gemma-3-4b-it")
        engine.select("technique", "GRPO")
        engine.select("benchmark", "mmlu")
        engine.set_sort_order("asc")

        engine.select("task", "aqua_rat")

        assert engine.selections == {
            "task": "aqua_rat",
            "model_family": ALL,
            "model": ALL,
            "technique": ALL,
            "benchmark": ALL,
        }
        assert engine.sort_order is SortOrder.DESC

    def test_task_change_in_aggregate_view_keeps_benchmark(self, engine):
        engine.set_view_mode("aggregate")
        engine.select("benchmark", "mmlu")
        engine.select("model_family", "gemma-3-4b-it")
        engine.set_sort_order("asc")

        engine.select("task", "gsm8k")

        assert engine.selection("model_family") == ALL
        assert engine.selection("benchmark") == "mmlu"
        assert engine.sort_order is SortOrder.ASC

    def test_inner_change_does_not_cascade(self, engine):
        engine.select("task", "gsm8k")
        engine.select("benchmark", "mmlu")
        engine.select("technique", "Lora/QLora")
        assert engine.selection("task") == "gsm8k"
        assert engine.selection("benchmark") == "mmlu"

    @pytest.mark.parametrize("dimension, value", [
        ("task", "gsm8k"),
        ("model_family", "gemma-3-4b-it"),
        ("model", "gsm8k__gemma-3-4b-it"),
        ("technique", "Lora+GRPO"),
        ("benchmark", "mmlu"),
    ])
    def test_reselecting_is_a_noop(self, engine, dimension, value):
        engine.select("task", "gsm8k")
        engine.select("model_family", "gemma-3-4b-it")
        engine.select("model", "gsm8k__gemma-3-4b-it")
        engine.select("technique", "Lora+GRPO")
        engine.select("benchmark", "mmlu")
        engine.set_sort_order("asc")
        before = engine.selections

        assert engine.select(dimension, value) is False
        assert engine.selections == before
        assert engine.sort_order is SortOrder.ASC


class TestSelfHealing:
    def test_model_reset_when_outer_excludes_it(self, engine):
        engine.select("model", "aqua_rat__gemma-3-4b-it")
        engine.select("model_family", "Phi-4-mini-instruct")
        assert engine.selection("model") == ALL

    def test_model_kept_when_still_available(self, engine):
        engine.select("model", "gsm8k__gemma-3-4b-it")
        engine.select("model_family", "gemma-3-4b-it")
        assert engine.selection("model") == "gsm8k__gemma-3-4b-it"

    def test_unknown_value_falls_back_to_all(self, engine):
        engine.select("technique", "RLHF")
        assert engine.selection("technique") == ALL

    def test_reload_heals_selections(self, engine):
        engine.select("model", "esnli__Llama-3.2-3B-Instruct")
        engine.store.load({"eval_results": [{"gsm8k__x": {"mmlu": {"accuracy_percent": 1}}}]})
        engine.refresh()
        assert engine.selection("model") == ALL

    def test_every_selection_in_its_options(self, engine):
        engine.select("task", "gsm8k")
        engine.select("technique", "Lora/QLora")
        engine.select("model_family", "gemma-3-4b-it")
        for dimension, value in engine.selections.items():
            if value != ALL:
                assert value in engine.options(dimension)


class TestModeAndReset:
    def test_view_mode_switch_resets_filters(self, engine):
        engine.select("task", "gsm8k")
        engine.set_sort_order("asc")
        assert engine.set_view_mode(ViewMode.AGGREGATE) is True
        assert set(engine.selections.values()) == {ALL}
        assert engine.sort_order is SortOrder.DESC

    def test_same_view_mode_is_a_noop(self, engine):
        engine.select("task", "gsm8k")
        assert engine.set_view_mode("list") is False
        assert engine.selection("task") == "gsm8k"

    def test_apply_outer_to_inner(self, engine):
        engine.apply({"benchmark": "mmlu", "task": "gsm8k", "model": "gsm8k__gemma-3-4b-it"}, order="asc")
        assert engine.selections["task"] == "gsm8k"
        assert engine.selections["model"] == "gsm8k__gemma-3-4b-it"
        assert engine.selections["benchmark"] == "mmlu"
        assert engine.sort_order is SortOrder.ASC

    def test_invalid_sort_order(self, engine):
        with pytest.raises(ValueError):
            engine.set_sort_order("sideways")


class TestPrimaryAnswerType:
    @pytest.fixture
    def record(self, document):
        return BenchmarkStore.from_document(document).records[0]

    def test_first_category(self, record):
        record = replace(record, by_answer_type={"mcq": {"acc": 1}, "free": {"acc": 2}})
        assert primary_answer_type(record) == ("mcq", {"acc": 1})

    @pytest.mark.parametrize("by_answer_type", [None, {}, {"": {"acc": 1}}, {"mcq": {}}, {"mcq": 5}])
    def test_missing(self, record, by_answer_type):
        assert primary_answer_type(replace(record, by_answer_type=by_answer_type)) is None
