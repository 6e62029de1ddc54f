"""Combination Generator module."""

from src.generator.combination_generator import (
    CANCEL_CHECK_INTERVAL,
    check_limits,
    estimate_count,
    format_result,
    generate,
    iter_cartesian,
    iter_permutations,
    iter_results,
    resolve_mode,
)
from src.generator.engine import CombinationEngine
from src.generator.errors import (
    AdmissionError,
    ExportNotAllowed,
    GeneratorError,
    ListIndexOutOfRange,
    NoValidLists,
    TooManyItemsInList,
    TooManyLists,
)
from src.generator.export import (
    build_export_file,
    export_csv_archive,
    export_results,
    results_to_dataframe,
    split_into_chunks,
)
from src.generator.list_store import ListStore, parse_items
from src.generator.tiers import TIER_LIMITS, PlanTier, get_tier_limits

__all__ = [
    "CANCEL_CHECK_INTERVAL",
    "CombinationEngine",
    "ListStore",
    "parse_items",
    "estimate_count",
    "resolve_mode",
    "check_limits",
    "iter_cartesian",
    "iter_permutations",
    "iter_results",
    "format_result",
    "generate",
    "build_export_file",
    "export_csv_archive",
    "export_results",
    "results_to_dataframe",
    "split_into_chunks",
    "PlanTier",
    "TIER_LIMITS",
    "get_tier_limits",
    "GeneratorError",
    "AdmissionError",
    "ListIndexOutOfRange",
    "NoValidLists",
    "TooManyLists",
    "TooManyItemsInList",
    "ExportNotAllowed",
]
