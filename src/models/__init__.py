from .generator import (
    COUNT_CEILING,
    CountEstimate,
    ExportFormat,
    GenerationConfig,
    GenerationMode,
    GenerationNotice,
    GenerationResult,
    ListEntry,
    SeparatorChoice,
    TierLimits,
)

__all__ = [
    "COUNT_CEILING",
    "CountEstimate",
    "ExportFormat",
    "GenerationConfig",
    "GenerationMode",
    "GenerationNotice",
    "GenerationResult",
    "ListEntry",
    "SeparatorChoice",
    "TierLimits",
]
