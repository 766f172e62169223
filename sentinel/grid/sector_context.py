"""
Sentinel Grid - Border Sector Risk Intelligence
Sector Context Module

Classifies sectors for context-aware decisions. The border rule is a
configurable row heuristic plus explicit per-sector overrides; it carries
no geographic boundary data.
"""

import logging
from enum import Enum
from typing import Dict, Iterable, Optional

from sentinel.config import GridConfig
from sentinel.grid.layout import GridLayout

# Configure module logger
logger = logging.getLogger(__name__)


class SectorType(Enum):
    """
    Sector classification.

    Attributes:
        INTERIOR: Standard monitoring sector
        BORDER: Sector adjacent to the border line
    """
    INTERIOR = "INTERIOR"
    BORDER = "BORDER"


class SectorClassifier:
    """
    Resolves the SectorType of a sector.

    Rows listed in ``GridConfig.border_rows`` are border sectors.
    Individual sectors can be reclassified with ``set_override``.

    Example:
        >>> classifier = SectorClassifier()
        >>> classifier.is_border("1-4")
        True
        >>> classifier.is_border("3-0")
        False
    """

    def __init__(
        self,
        config: Optional[GridConfig] = None,
        layout: Optional[GridLayout] = None
    ):
        """
        Initialize the classifier.

        Args:
            config: Grid configuration (border rows)
            layout: Layout used to parse identifiers
        """
        self._config = config or GridConfig()
        self._layout = layout or GridLayout(self._config)
        self._border_rows = frozenset(self._config.border_rows)
        self._overrides: Dict[str, SectorType] = {}
        logger.info(
            f"SectorClassifier initialized with border_rows={sorted(self._border_rows)}"
        )

    @property
    def border_rows(self) -> Iterable[int]:
        return tuple(sorted(self._border_rows))

    def set_override(self, sector_id: str, sector_type: SectorType) -> None:
        """
        Force a classification for one sector.

        Args:
            sector_id: Sector identifier
            sector_type: Classification to apply
        """
        self._layout.parse_id(sector_id)
        self._overrides[sector_id] = sector_type
        logger.debug(f"Sector {sector_id} classified as {sector_type.value}")

    def clear_override(self, sector_id: str) -> bool:
        """Remove an override. Returns True if one existed."""
        return self._overrides.pop(sector_id, None) is not None

    def classify(self, sector_id: str) -> SectorType:
        """
        Get the classification of a sector.

        Args:
            sector_id: Sector identifier

        Returns:
            SectorType
        """
        if sector_id in self._overrides:
            return self._overrides[sector_id]

        row, _ = self._layout.parse_id(sector_id)
        if row in self._border_rows:
            return SectorType.BORDER
        return SectorType.INTERIOR

    def is_border(self, sector_id: str) -> bool:
        """Check whether a sector is a border sector."""
        return self.classify(sector_id) == SectorType.BORDER

    def __repr__(self) -> str:
        return (
            f"SectorClassifier(border_rows={self.border_rows}, "
            f"overrides={len(self._overrides)})"
        )
