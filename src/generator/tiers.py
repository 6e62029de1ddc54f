"""Plan tiers and their capacity limits."""

from enum import Enum
from typing import Dict, Union

from src.models.generator import ExportFormat, TierLimits


class PlanTier(str, Enum):
    """Named plans offered by the product."""
    FREE = "free"
    STARTER = "starter"
    PROFESSIONAL = "professional"
    ENTERPRISE = "enterprise"
    UNLIMITED = "unlimited"


_STANDARD_EXPORTS = [ExportFormat.TXT, ExportFormat.CSV, ExportFormat.JSON]
_ALL_EXPORTS = _STANDARD_EXPORTS + [ExportFormat.XLSX, ExportFormat.XML]

TIER_LIMITS: Dict[PlanTier, TierLimits] = {
    PlanTier.FREE: TierLimits(
        max_lists=3,
        max_items_per_list=20,
        max_combinations=5000,
        allowed_exports=[ExportFormat.TXT],
    ),
    PlanTier.STARTER: TierLimits(
        max_lists=5,
        max_items_per_list=10,
        max_combinations=10000,
        allowed_exports=[ExportFormat.TXT, ExportFormat.CSV],
    ),
    PlanTier.PROFESSIONAL: TierLimits(
        max_lists=10,
        max_items_per_list=20,
        max_combinations=100000,
        allowed_exports=_STANDARD_EXPORTS,
    ),
    # Unlimited lists and items, but output is always capped
    PlanTier.ENTERPRISE: TierLimits(
        max_lists=None,
        max_items_per_list=None,
        max_combinations=1000000,
        allowed_exports=_ALL_EXPORTS,
    ),
    PlanTier.UNLIMITED: TierLimits(
        max_lists=None,
        max_items_per_list=None,
        max_combinations=5000000,
        allowed_exports=_ALL_EXPORTS,
    ),
}


def get_tier_limits(tier: Union[PlanTier, str]) -> TierLimits:
    """
    Look up the limits of a plan.

    Args:
        tier: Tier enum or its name (case-insensitive)

    Returns:
        A copy of the tier's TierLimits

    Raises:
        ValueError: Unknown tier name
    """
    if isinstance(tier, str) and not isinstance(tier, PlanTier):
        try:
            tier = PlanTier(tier.strip().lower())
        except ValueError:
            valid = ", ".join(t.value for t in PlanTier)
            raise ValueError(f"Unknown tier '{tier}'. Valid tiers: {valid}")
    return TIER_LIMITS[tier].model_copy(deep=True)
