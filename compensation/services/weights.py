import logging
from typing import Optional

from compensation.config import settings
from compensation.core.exceptions import ConfigurationError
from compensation.schemas.weights import ResolvedWeights

logger = logging.getLogger(__name__)

SENIORITY_CATEGORY_LABELS = {
    1: "Jr.",
    2: "Ssr.",
    3: "Sr.",
    4: "Líder",
    5: "C-Level",
}


def parse_seniority_category(level: str) -> int:
    """Leading integer of a "category.sub-level" code, e.g. "3.2" -> 3"""
    head = level.strip().split(".", 1)[0]
    try:
        category = int(head)
    except ValueError:
        raise ConfigurationError(level)
    if category not in SENIORITY_CATEGORY_LABELS:
        raise ConfigurationError(level, f"Seniority category out of range: {level!r}")
    return category


def seniority_label(level: Optional[str]) -> str:
    if not level:
        return "Sin definir"
    try:
        category = parse_seniority_category(level)
    except ConfigurationError:
        return level
    return f"Lev. {level} - {SENIORITY_CATEGORY_LABELS[category]}"


def resolve_weights(seniority_level: Optional[str]) -> ResolvedWeights:
    default_category = settings.DEFAULT_SENIORITY_CATEGORY

    if not seniority_level:
        return ResolvedWeights(
            seniority_level=seniority_level,
            category=default_category,
            label=seniority_label(None),
            is_default=True,
            warning="Seniority level not set; default weights applied",
            weights=settings.weight_distribution(default_category),
        )

    try:
        category = parse_seniority_category(seniority_level)
    except ConfigurationError as e:
        logger.warning("%s; falling back to category %s", e, default_category)
        return ResolvedWeights(
            seniority_level=seniority_level,
            category=default_category,
            label=seniority_label(seniority_level),
            is_default=True,
            warning=str(e),
            weights=settings.weight_distribution(default_category),
        )

    return ResolvedWeights(
        seniority_level=seniority_level,
        category=category,
        label=seniority_label(seniority_level),
        is_default=False,
        weights=settings.weight_distribution(category),
    )
