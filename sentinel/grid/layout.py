"""
Sentinel Grid - Border Sector Risk Intelligence
Grid Layout Module

Static spatial addressing for the fixed R x C sector grid.

Features:
- "row-col" identifier parsing and formatting
- Sector bounds and center derived from the grid configuration
- 4-connected neighbor enumeration
"""

import logging
from typing import Iterator, List, Optional, Tuple

from sentinel.config import GridConfig
from sentinel.exceptions import InvalidSectorError
from sentinel.grid.grid_types import Coordinates

# Configure module logger
logger = logging.getLogger(__name__)

# Up, down, left, right
NEIGHBOR_OFFSETS: Tuple[Tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


def format_sector_id(row: int, col: int) -> str:
    """Serialize grid indices as "row-col"."""
    return f"{row}-{col}"


class GridLayout:
    """
    Addressing scheme for a fixed-size sector grid.

    Row 0 is the southern edge; sectors grow north and east from the
    grid origin, which is placed so the grid is centered on the
    configured map center.

    Example:
        >>> layout = GridLayout()
        >>> layout.parse_id("2-3")
        (2, 3)
        >>> layout.neighbors("0-0")
        ['1-0', '0-1']
    """

    def __init__(self, config: Optional[GridConfig] = None):
        """
        Initialize the layout.

        Args:
            config: Grid configuration
        """
        self._config = config or GridConfig()
        self._origin_lat = (
            self._config.center_lat
            - (self._config.rows * self._config.cell_lat_size) / 2
        )
        self._origin_lng = (
            self._config.center_lng
            - (self._config.cols * self._config.cell_lng_size) / 2
        )

    @property
    def config(self) -> GridConfig:
        """Get grid configuration."""
        return self._config

    @property
    def rows(self) -> int:
        return self._config.rows

    @property
    def cols(self) -> int:
        return self._config.cols

    @property
    def size(self) -> int:
        """Total number of sectors."""
        return self._config.rows * self._config.cols

    def in_bounds(self, row: int, col: int) -> bool:
        """Check whether grid indices address a sector."""
        return 0 <= row < self._config.rows and 0 <= col < self._config.cols

    def parse_id(self, sector_id: str) -> Tuple[int, int]:
        """
        Parse a "row-col" identifier.

        Args:
            sector_id: Sector identifier

        Returns:
            (row, col) tuple

        Raises:
            InvalidSectorError: If malformed or outside the grid
        """
        parts = str(sector_id).split("-")
        if len(parts) != 2 or not all(p.isascii() and p.isdigit() for p in parts):
            raise InvalidSectorError(sector_id, "expected 'row-col'")

        row, col = int(parts[0]), int(parts[1])
        if not self.in_bounds(row, col):
            raise InvalidSectorError(
                sector_id,
                f"outside {self._config.rows}x{self._config.cols} grid"
            )
        return row, col

    def is_valid_id(self, sector_id: str) -> bool:
        """Check an identifier without raising."""
        try:
            self.parse_id(sector_id)
        except InvalidSectorError:
            return False
        return True

    def sector_ids(self) -> Iterator[str]:
        """Iterate all identifiers in row-major order."""
        for row in range(self._config.rows):
            for col in range(self._config.cols):
                yield format_sector_id(row, col)

    def bounds(self, sector_id: str) -> Tuple[Coordinates, Coordinates]:
        """
        Get (south-west, north-east) corners of a sector.

        Args:
            sector_id: Sector identifier

        Returns:
            Tuple of corner coordinates
        """
        row, col = self.parse_id(sector_id)
        lat = self._origin_lat + row * self._config.cell_lat_size
        lng = self._origin_lng + col * self._config.cell_lng_size
        return (
            Coordinates(lat=lat, lng=lng),
            Coordinates(
                lat=lat + self._config.cell_lat_size,
                lng=lng + self._config.cell_lng_size
            )
        )

    def center(self, sector_id: str) -> Coordinates:
        """Get the center point of a sector."""
        south_west, _ = self.bounds(sector_id)
        return Coordinates(
            lat=south_west.lat + self._config.cell_lat_size / 2,
            lng=south_west.lng + self._config.cell_lng_size / 2
        )

    def neighbors(self, sector_id: str) -> List[str]:
        """
        Get the 4-connected neighbors of a sector (no diagonals).

        Args:
            sector_id: Sector identifier

        Returns:
            Neighbor identifiers in up, down, left, right order
        """
        row, col = self.parse_id(sector_id)
        result = []
        for d_row, d_col in NEIGHBOR_OFFSETS:
            n_row, n_col = row + d_row, col + d_col
            if self.in_bounds(n_row, n_col):
                result.append(format_sector_id(n_row, n_col))
        return result

    def manhattan(self, a: str, b: str) -> int:
        """Manhattan distance between two sectors in index space."""
        a_row, a_col = self.parse_id(a)
        b_row, b_col = self.parse_id(b)
        return abs(a_row - b_row) + abs(a_col - b_col)

    def __repr__(self) -> str:
        return f"GridLayout(rows={self._config.rows}, cols={self._config.cols})"
