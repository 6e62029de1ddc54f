"""Session engine and tier preset tests."""

import pytest

from src.generator import (
    CombinationEngine,
    ListIndexOutOfRange,
    PlanTier,
    TooManyLists,
    get_tier_limits,
)
from src.models.generator import (
    ExportFormat,
    GenerationConfig,
    GenerationMode,
    SeparatorChoice,
)


def test_engine_generate_flow():
    engine = CombinationEngine()
    engine.add_list("a\nb", "Letters")
    engine.add_list("1\n2", "Digits")
    engine.set_config(GenerationMode.COMBINATIONS, "-", "", "")

    assert engine.estimate_count().value == 4
    result = engine.generate(get_tier_limits(PlanTier.FREE))
    assert result.items == ["a-1", "a-2", "b-1", "b-2"]


def test_engine_remove_and_clear():
    engine = CombinationEngine()
    engine.add_list("a")
    engine.add_list("b")
    engine.remove_list(1)
    assert [entry.items for entry in engine.lists] == [["a"]]

    with pytest.raises(ListIndexOutOfRange):
        engine.remove_list(5)

    engine.clear_lists()
    assert engine.lists == []
    assert engine.estimate_count().value == 0


def test_engine_reuse_without_reset():
    engine = CombinationEngine()
    engine.add_list("x\ny\nz")
    engine.set_config(mode=GenerationMode.PERMUTATIONS)
    limits = get_tier_limits("free")

    first = engine.generate(limits)
    second = engine.generate(limits)
    assert first == second
    assert len(first.items) == 6


def test_engine_enforces_tier():
    engine = CombinationEngine()
    for _ in range(4):
        engine.add_list("a\nb")
    with pytest.raises(TooManyLists):
        engine.generate(get_tier_limits(PlanTier.FREE))

    result = engine.generate(get_tier_limits(PlanTier.STARTER))
    assert len(result.items) == 16


def test_engines_are_independent():
    first = CombinationEngine()
    second = CombinationEngine()
    first.add_list("a")
    assert second.lists == []


def test_set_config_keeps_permutation_separator():
    engine = CombinationEngine(GenerationConfig(permutation_separator="|"))
    engine.set_config(mode=GenerationMode.PERMUTATIONS, separator=",")
    engine.add_list("a\nb")
    assert engine.generate(get_tier_limits("free")).items == ["a|b", "b|a"]


@pytest.mark.parametrize(
    "tier, max_lists, max_items, max_combinations",
    [
        ("free", 3, 20, 5000),
        ("starter", 5, 10, 10000),
        ("professional", 10, 20, 100000),
        ("enterprise", None, None, 1000000),
        ("unlimited", None, None, 5000000),
    ],
)
def test_tier_presets(tier, max_lists, max_items, max_combinations):
    limits = get_tier_limits(tier)
    assert limits.max_lists == max_lists
    assert limits.max_items_per_list == max_items
    assert limits.max_combinations == max_combinations


def test_tier_lookup_is_case_insensitive():
    assert get_tier_limits(" Starter ") == get_tier_limits(PlanTier.STARTER)


def test_unknown_tier():
    with pytest.raises(ValueError, match="Unknown tier"):
        get_tier_limits("platinum")


def test_tier_limits_are_copies():
    limits = get_tier_limits(PlanTier.FREE)
    limits.max_combinations = 1
    limits.allowed_exports.append(ExportFormat.JSON)
    fresh = get_tier_limits(PlanTier.FREE)
    assert fresh.max_combinations == 5000
    assert fresh.allowed_exports == [ExportFormat.TXT]


@pytest.mark.parametrize(
    "choice, custom, expected",
    [
        (SeparatorChoice.SPACE, "", " "),
        (SeparatorChoice.COMMA, "", ","),
        (SeparatorChoice.HYPHEN, "", "-"),
        (SeparatorChoice.CUSTOM, " | ", " | "),
        (SeparatorChoice.CUSTOM, "", " "),
        ("comma", "", ","),
    ],
)
def test_config_from_separator_choice(choice, custom, expected):
    config = GenerationConfig.from_choice(choice=choice, custom_separator=custom)
    assert config.separator == expected


def test_config_rejects_unknown_choice():
    with pytest.raises(ValueError):
        GenerationConfig.from_choice(choice="tab")


def test_config_rejects_unknown_mode():
    with pytest.raises(ValueError):
        GenerationConfig(mode="shuffle")


def test_engine_generation_leaves_store_unchanged():
    engine = CombinationEngine()
    engine.add_list("a\nb")
    engine.add_list("1")
    engine.generate(get_tier_limits("free"))
    assert [entry.items for entry in engine.lists] == [["a", "b"], ["1"]]


def test_engine_estimate_with_huge_lists():
    engine = CombinationEngine()
    for _ in range(50):
        engine.add_list("\n".join(str(i) for i in range(50)))
    assert engine.estimate_count().overflow
