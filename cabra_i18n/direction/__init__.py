"""Layout direction (LTR/RTL) management."""

from cabra_i18n.direction.manager import EXCLUDE_SELECTORS, RTL_LANGUAGES, DirectionManager

__all__ = ["DirectionManager", "EXCLUDE_SELECTORS", "RTL_LANGUAGES"]
