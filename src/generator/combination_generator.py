"""Core logic for counting, enumerating and formatting combinations."""

import itertools
from typing import Callable, Iterator, List, Optional, Sequence, Tuple, Union

from src.generator.errors import NoValidLists, TooManyItemsInList, TooManyLists
from src.models.generator import (
    COUNT_CEILING,
    CountEstimate,
    GenerationConfig,
    GenerationMode,
    GenerationNotice,
    GenerationResult,
    ListEntry,
    TierLimits,
)

# How many results are emitted between two polls of a cancellation callback
CANCEL_CHECK_INTERVAL = 1000

ListLike = Union[ListEntry, Sequence[str]]


def item_lists(lists: Sequence[ListLike]) -> List[Sequence[str]]:
    """
    Normalize input lists to sequences of trimmed, non-empty items.

    ListEntry items are already clean and are returned without copying;
    plain sequences are trimmed and filtered.

    Args:
        lists: ListEntry objects or plain sequences of strings

    Returns:
        List of item sequences, in input order
    """
    normalized = []
    for entry in lists:
        if isinstance(entry, ListEntry):
            normalized.append(entry.items)
        else:
            normalized.append([item.strip() for item in entry if item.strip()])
    return normalized


def _checked_product(factors: Sequence[int]) -> CountEstimate:
    """Multiply factors, saturating at the 64-bit ceiling."""
    if any(factor == 0 for factor in factors):
        return CountEstimate.exact(0)
    total = 1
    for factor in factors:
        total *= factor
        if total > COUNT_CEILING:
            return CountEstimate.too_large()
    return CountEstimate.exact(total)


def _checked_factorial(n: int) -> CountEstimate:
    """n! with the same saturation policy as _checked_product."""
    total = 1
    for i in range(2, n + 1):
        total *= i
        if total > COUNT_CEILING:
            return CountEstimate.too_large()
    return CountEstimate.exact(total)


def resolve_mode(lists: Sequence[ListLike], mode: GenerationMode) -> Tuple[GenerationMode, bool]:
    """
    Determine the mode actually used for enumeration.

    Permutations are only defined for a single list; with more lists the
    Cartesian product is used instead.

    Returns:
        Tuple of (effective_mode, fell_back)
    """
    mode = GenerationMode(mode)
    if mode == GenerationMode.PERMUTATIONS and len(lists) > 1:
        return GenerationMode.COMBINATIONS, True
    return mode, False


def _estimate(items: Sequence[Sequence[str]], mode: GenerationMode) -> CountEstimate:
    if not items:
        return CountEstimate.exact(0)

    effective_mode, _ = resolve_mode(items, mode)
    if effective_mode == GenerationMode.PERMUTATIONS:
        n = len(items[0])
        if n == 0:
            return CountEstimate.exact(0)
        return _checked_factorial(n)

    return _checked_product([len(values) for values in items])


def estimate_count(lists: Sequence[ListLike], mode: GenerationMode = GenerationMode.COMBINATIONS) -> CountEstimate:
    """
    Calculate total results without enumerating them.

    Runs in O(number of lists) for ListEntry input. Counts beyond
    2**64 - 1 are reported as overflow rather than computed.

    Args:
        lists: Input lists
        mode: Requested generation mode

    Returns:
        CountEstimate
    """
    return _estimate(item_lists(lists), mode)


def iter_cartesian(lists: Sequence[Sequence[str]]) -> Iterator[Tuple[str, ...]]:
    """
    Lazily enumerate the Cartesian product in odometer order.

    The rightmost list varies fastest. Any empty list makes the product empty.
    """
    if any(len(values) == 0 for values in lists):
        return iter(())
    return itertools.product(*lists)


def iter_permutations(items: Sequence[str]) -> Iterator[Tuple[str, ...]]:
    """
    Lazily enumerate all orderings of a single list.

    Orderings are emitted lexicographically by input position, so equal
    values at different positions produce separate results.
    """
    if len(items) == 0:
        return iter(())
    return itertools.permutations(items)


def format_result(parts: Sequence[str], config: GenerationConfig, joiner: Optional[str] = None) -> str:
    """
    Format one result as prefix + joined parts + suffix.

    Args:
        parts: Items of one combination or permutation
        config: Generation settings
        joiner: String between parts; defaults to config.separator

    Returns:
        Formatted string
    """
    if joiner is None:
        joiner = config.separator
    return f"{config.prefix}{joiner.join(parts)}{config.suffix}"


def _check_limits(items: Sequence[Sequence[str]], limits: TierLimits) -> None:
    if not items:
        raise NoValidLists()

    if limits.max_lists is not None and len(items) > limits.max_lists:
        raise TooManyLists(len(items), limits.max_lists)

    for index, values in enumerate(items):
        if limits.max_items_per_list is not None and len(values) > limits.max_items_per_list:
            raise TooManyItemsInList(index, len(values), limits.max_items_per_list)
        if not values:
            raise NoValidLists(index)


def check_limits(lists: Sequence[ListLike], limits: TierLimits) -> None:
    """
    Reject requests that exceed the plan before any enumeration.

    Raises:
        NoValidLists: No lists, or a list without items
        TooManyLists: More lists than the plan allows
        TooManyItemsInList: A list longer than the plan allows
    """
    _check_limits(item_lists(lists), limits)


def _iter_results(items: Sequence[Sequence[str]], config: GenerationConfig) -> Iterator[str]:
    effective_mode, _ = resolve_mode(items, config.mode)

    if effective_mode == GenerationMode.PERMUTATIONS:
        joiner = config.permutation_separator
        raw = iter_permutations(items[0]) if items else iter(())
    else:
        joiner = config.separator
        raw = iter_cartesian(items) if items else iter(())

    for parts in raw:
        yield format_result(parts, config, joiner)


def iter_results(
    lists: Sequence[ListLike],
    config: GenerationConfig
) -> Iterator[str]:
    """
    Lazily yield formatted results in enumeration order.

    No limits are applied; callers stop consuming when they have enough.
    """
    return _iter_results(item_lists(lists), config)


def generate(
    lists: Sequence[ListLike],
    config: GenerationConfig,
    limits: TierLimits,
    should_stop: Optional[Callable[[], bool]] = None
) -> GenerationResult:
    """
    Generate formatted results under a plan's limits.

    Counts that exceed limits.max_combinations, or overflow, are not
    rejected: output stops after max_combinations results and the result is
    flagged as truncated.

    Args:
        lists: Input lists
        config: Generation settings
        limits: Plan limits
        should_stop: Optional callback polled every CANCEL_CHECK_INTERVAL
            results; returning True ends generation early

    Returns:
        GenerationResult
    """
    items = item_lists(lists)
    _check_limits(items, limits)

    _, fell_back = resolve_mode(items, config.mode)
    estimate = _estimate(items, config.mode)

    truncated = estimate.exceeds(limits.max_combinations)
    emit_limit = limits.max_combinations if truncated else estimate.value

    notices = []
    if fell_back:
        notices.append(GenerationNotice.PERMUTATION_FALLBACK_TO_PRODUCT)
    if truncated:
        notices.append(GenerationNotice.TRUNCATED)
    if estimate.overflow:
        notices.append(GenerationNotice.COUNT_OVERFLOW)

    results = []
    cancelled = False
    for result in itertools.islice(_iter_results(items, config), emit_limit):
        if should_stop is not None and results and len(results) % CANCEL_CHECK_INTERVAL == 0:
            if should_stop():
                cancelled = True
                break
        results.append(result)

    return GenerationResult(
        items=results,
        total_count=estimate.value,
        truncated=truncated,
        truncated_at=limits.max_combinations if truncated else 0,
        overflow=estimate.overflow,
        cancelled=cancelled,
        notices=notices,
    )
