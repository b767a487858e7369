"""
Language proficiency scale (CEFR A1..C2 plus native).
"""

import logging
from typing import Dict, List, Optional

from .config import LANGUAGE_LEVELS, LANGUAGE_LEVEL_LABELS

logger = logging.getLogger(__name__)


def level_rank(level: Optional[str]) -> Optional[int]:
    """Rank 1..7 of a level token, or None for unknown tokens."""
    if not isinstance(level, str):
        return None
    return LANGUAGE_LEVELS.get(level)


def meets_requirement(held_level: Optional[str], required_level: Optional[str]) -> bool:
    """
    Check whether a held proficiency level satisfies a required one.

    Unknown tokens on either side never satisfy a requirement.

    Args:
        held_level: Level the candidate/searcher has
        required_level: Minimum level asked for

    Returns:
        True if held_level ranks at or above required_level
    """
    held_rank = level_rank(held_level)
    required_rank = level_rank(required_level)

    if held_rank is None or required_rank is None:
        logger.warning(f"Unknown language level ({held_level!r} vs {required_level!r}), requirement not met")
        return False

    return held_rank >= required_rank


def format_language_level(level: str) -> str:
    """Long display label for a level, or the input unchanged if unknown."""
    return LANGUAGE_LEVEL_LABELS.get(level, level)


def language_level_options(compact: bool = False) -> List[Dict[str, str]]:
    """Options for level dropdowns, ordered from A1 to native."""
    ordered = sorted(LANGUAGE_LEVELS, key=LANGUAGE_LEVELS.get)
    if compact:
        return [
            {"value": level, "label": format_language_level(level) if level == "native" else level}
            for level in ordered
        ]
    return [{"value": level, "label": format_language_level(level)} for level in ordered]
