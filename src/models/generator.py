"""Pydantic models for the Combination Generator."""

import sys
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


# Largest count representable by an unsigned 64-bit counter
COUNT_CEILING = 2 ** 64 - 1


class GenerationMode(str, Enum):
    """How the input lists are combined."""
    COMBINATIONS = "combinations"
    PERMUTATIONS = "permutations"


class SeparatorChoice(str, Enum):
    """Separator presets offered to the user."""
    SPACE = "space"
    COMMA = "comma"
    HYPHEN = "hyphen"
    CUSTOM = "custom"


SEPARATOR_PRESETS = {
    SeparatorChoice.SPACE: " ",
    SeparatorChoice.COMMA: ",",
    SeparatorChoice.HYPHEN: "-",
}


class ExportFormat(str, Enum):
    """File formats a result can be exported to."""
    TXT = "txt"
    CSV = "csv"
    JSON = "json"
    XLSX = "xlsx"
    XML = "xml"


class GenerationNotice(str, Enum):
    """Informational signals attached to a successful generation."""
    PERMUTATION_FALLBACK_TO_PRODUCT = "permutation_fallback_to_product"
    TRUNCATED = "truncated"
    COUNT_OVERFLOW = "count_overflow"


class ListEntry(BaseModel):
    """A titled, ordered list of items."""

    title: Optional[str] = Field(default=None, description="Optional list title")
    items: List[str] = Field(default_factory=list, description="Items in input order")

    @field_validator("items")
    @classmethod
    def _strip_items(cls, items: List[str]) -> List[str]:
        # Trim and drop empty items; duplicates are kept
        return [item.strip() for item in items if item.strip()]


class GenerationConfig(BaseModel):
    """Formatting and mode settings for a generation."""

    mode: GenerationMode = Field(default=GenerationMode.COMBINATIONS, description="Generation mode")
    separator: str = Field(default=" ", description="Joiner between items of a combination")
    prefix: str = Field(default="", description="String prepended to every result")
    suffix: str = Field(default="", description="String appended to every result")
    permutation_separator: str = Field(
        default="",
        description="Joiner between items of a permutation"
    )

    @classmethod
    def from_choice(
        cls,
        mode: GenerationMode = GenerationMode.COMBINATIONS,
        choice: SeparatorChoice = SeparatorChoice.SPACE,
        custom_separator: str = "",
        prefix: str = "",
        suffix: str = ""
    ) -> "GenerationConfig":
        """
        Build a config from a separator preset.

        An empty custom separator falls back to a single space.

        Args:
            mode: Generation mode
            choice: Separator preset
            custom_separator: Separator used when choice is CUSTOM
            prefix: Result prefix
            suffix: Result suffix

        Returns:
            GenerationConfig
        """
        choice = SeparatorChoice(choice)
        if choice == SeparatorChoice.CUSTOM:
            separator = custom_separator or " "
        else:
            separator = SEPARATOR_PRESETS[choice]
        return cls(mode=mode, separator=separator, prefix=prefix, suffix=suffix)


class TierLimits(BaseModel):
    """Capacity limits of a plan. None means unlimited."""

    max_lists: Optional[int] = Field(default=None, ge=0, description="Maximum number of lists")
    max_items_per_list: Optional[int] = Field(default=None, ge=0, description="Maximum items in one list")
    max_combinations: int = Field(
        ...,
        ge=0,
        le=sys.maxsize,
        description="Maximum number of emitted results"
    )
    allowed_exports: List[ExportFormat] = Field(
        default_factory=lambda: [ExportFormat.TXT],
        description="Export formats available on this plan"
    )


class CountEstimate(BaseModel):
    """Exact count, or a saturated value flagged as overflow."""

    value: int = Field(..., ge=0, le=COUNT_CEILING, description="Exact or saturated count")
    overflow: bool = Field(default=False, description="True count exceeds the 64-bit ceiling")

    @classmethod
    def exact(cls, value: int) -> "CountEstimate":
        return cls(value=value, overflow=False)

    @classmethod
    def too_large(cls) -> "CountEstimate":
        return cls(value=COUNT_CEILING, overflow=True)

    def exceeds(self, limit: int) -> bool:
        """Whether the true count is larger than limit."""
        return self.overflow or self.value > limit


class GenerationResult(BaseModel):
    """Formatted results of one generation."""

    items: List[str] = Field(default_factory=list, description="Formatted results in enumeration order")
    total_count: int = Field(..., ge=0, description="Exact or saturating total count")
    truncated: bool = Field(default=False, description="Whether output was capped")
    truncated_at: int = Field(default=0, ge=0, description="Cap applied when truncated")
    overflow: bool = Field(default=False, description="Whether total_count saturated")
    cancelled: bool = Field(default=False, description="Whether generation was stopped early by the caller")
    notices: List[GenerationNotice] = Field(default_factory=list, description="Warnings for the caller")

    @model_validator(mode="after")
    def _check_length(self) -> "GenerationResult":
        expected = min(self.total_count, self.truncated_at) if self.truncated else self.total_count
        if self.cancelled:
            if len(self.items) > expected:
                raise ValueError("Cancelled result holds more items than allowed")
        elif len(self.items) != expected:
            raise ValueError(
                f"Result holds {len(self.items)} items, expected {expected}"
            )
        return self


# ---------------------------------------------------------------------------
# API request / response models
# ---------------------------------------------------------------------------

class ListInput(BaseModel):
    """A list as sent by the client: raw textarea text or explicit items."""

    title: Optional[str] = Field(default=None, description="Optional list title")
    raw_text: Optional[str] = Field(default=None, description="Newline-separated items")
    items: Optional[List[str]] = Field(default=None, description="Explicit items")

    @model_validator(mode="after")
    def _one_source(self) -> "ListInput":
        if self.raw_text is None and self.items is None:
            raise ValueError("Either raw_text or items must be provided")
        if self.raw_text is not None and self.items is not None:
            raise ValueError("Provide raw_text or items, not both")
        return self


class GeneratorCountRequest(BaseModel):
    """Request model for calculating the result count."""

    lists: List[ListInput] = Field(default_factory=list, description="Input lists")
    mode: GenerationMode = Field(default=GenerationMode.COMBINATIONS, description="Generation mode")


class GeneratorCountResponse(BaseModel):
    """Response model for the result count."""

    total_count: int = Field(..., description="Exact or saturated count")
    overflow: bool = Field(default=False, description="Count too large to compute exactly")
    effective_mode: GenerationMode = Field(..., description="Mode actually used for enumeration")
    notices: List[GenerationNotice] = Field(default_factory=list, description="Warnings for the caller")


class GeneratorRequest(BaseModel):
    """Request model for generating results under a plan."""

    lists: List[ListInput] = Field(default_factory=list, description="Input lists")
    config: GenerationConfig = Field(default_factory=GenerationConfig, description="Generation settings")
    tier: Optional[str] = Field(
        default=None,
        description="Plan tier name; the service default is used when neither tier nor limits is set"
    )
    limits: Optional[TierLimits] = Field(default=None, description="Explicit limits, overriding tier")


class GeneratorPreviewRequest(GeneratorRequest):
    """Request model for preview generation."""

    preview_limit: int = Field(
        default=100,
        ge=1,
        le=1000,
        description="Number of results to preview"
    )


class GeneratorPreviewResponse(BaseModel):
    """Response model for preview generation."""

    total_count: int = Field(..., description="Exact or saturated count")
    overflow: bool = Field(default=False, description="Count too large to compute exactly")
    preview: List[str] = Field(..., description="First results in enumeration order")
    notices: List[GenerationNotice] = Field(default_factory=list, description="Warnings for the caller")


class GeneratorExportRequest(GeneratorRequest):
    """Request model for exporting results to a file."""

    format: ExportFormat = Field(default=ExportFormat.TXT, description="Export file format")
    filename_prefix: str = Field(default="combinations", description="Prefix for the exported filename")


class TierInfo(BaseModel):
    """A named plan with its limits."""

    name: str = Field(..., description="Tier name")
    limits: TierLimits = Field(..., description="Tier limits")
