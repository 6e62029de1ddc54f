"""Per-session Combination Engine."""

from typing import Callable, List, Optional

from src.generator.combination_generator import estimate_count, generate
from src.generator.list_store import ListStore
from src.models.generator import (
    CountEstimate,
    GenerationConfig,
    GenerationMode,
    GenerationResult,
    ListEntry,
    TierLimits,
)


class CombinationEngine:
    """
    Session object bundling a ListStore with a GenerationConfig.

    Each user session owns its own engine. Generation itself is delegated to
    the stateless functions in combination_generator, which only read the
    stored lists, so an engine can be reused without resetting.
    """

    def __init__(self, config: Optional[GenerationConfig] = None):
        self.store = ListStore()
        self.config = config or GenerationConfig()

    @property
    def lists(self) -> List[ListEntry]:
        return self.store.lists

    def add_list(self, raw_text: str, title: Optional[str] = None) -> ListEntry:
        return self.store.add_list(raw_text, title)

    def remove_list(self, index: int) -> ListEntry:
        return self.store.remove_list(index)

    def clear_lists(self) -> None:
        self.store.clear()

    def set_config(
        self,
        mode: GenerationMode = GenerationMode.COMBINATIONS,
        separator: str = " ",
        prefix: str = "",
        suffix: str = ""
    ) -> GenerationConfig:
        """Replace the generation settings, keeping the permutation joiner."""
        self.config = GenerationConfig(
            mode=mode,
            separator=separator,
            prefix=prefix,
            suffix=suffix,
            permutation_separator=self.config.permutation_separator,
        )
        return self.config

    def estimate_count(self) -> CountEstimate:
        return estimate_count(self.store.entries(), self.config.mode)

    def generate(
        self,
        limits: TierLimits,
        should_stop: Optional[Callable[[], bool]] = None
    ) -> GenerationResult:
        return generate(self.store.entries(), self.config, limits, should_stop=should_stop)
