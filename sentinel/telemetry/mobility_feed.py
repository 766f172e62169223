"""
Sentinel Grid - Border Sector Risk Intelligence
Mobility Feed Module

Simulated per-sector movement density, standing in for a live telemetry
feed. Produces drifting activity blobs, fixed town hotspots, night spikes
at border crossings and fog-driven shifts toward cover.
"""

import math
import random
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class MobilityFeedConfig:
    """
    Simulation parameters.

    Attributes:
        flow_amplitude: Peak density of the drifting flow
        town_sectors: Sectors with a permanent activity floor
        town_bonus: Density added at town sectors
        night_factor: Multiplier applied at night
        crossing_sectors: Border crossing points
        night_spike: Density added at crossings on spike ticks
        night_spike_period: Ticks between crossing spikes
        fog_visibility: Visibility (m) below which movement shifts to cover
        cover_bonus: Density added in cover sectors during fog
        open_penalty: Density removed in open sectors during fog
        spike_probability: Chance of a random spike per sample
        spike_min: Minimum random spike
        spike_range: Random spike spread above the minimum
        noise: Half-width of uniform noise
    """
    flow_amplitude: float = 55.0
    town_sectors: Tuple[str, ...] = ("2-2", "3-3")
    town_bonus: float = 25.0
    night_factor: float = 0.4
    crossing_sectors: Tuple[str, ...] = ("0-2", "0-3")
    night_spike: float = 70.0
    night_spike_period: int = 8
    fog_visibility: float = 2000
    cover_bonus: float = 25.0
    open_penalty: float = 15.0
    spike_probability: float = 0.05
    spike_min: float = 20.0
    spike_range: float = 30.0
    noise: float = 5.0


class SimulatedMobilityFeed:
    """
    Deterministic-given-seed mobility simulator.

    Example:
        >>> feed = SimulatedMobilityFeed(rng=random.Random(1))
        >>> feed.density("0-2", tick=8, is_day=False, visibility=10000)
    """

    def __init__(
        self,
        config: Optional[MobilityFeedConfig] = None,
        cols: int = 6,
        rng: Optional[random.Random] = None
    ):
        """
        Initialize the feed.

        Args:
            config: Simulation parameters
            cols: Grid column count (last column counts as cover)
            rng: Random source for spikes and noise
        """
        self._config = config or MobilityFeedConfig()
        self._cols = cols
        self._rng = rng or random.Random()

    def density(
        self,
        sector_id: str,
        tick: int = 0,
        is_day: bool = True,
        visibility: float = 10000
    ) -> float:
        """
        Movement density for one sector on one tick.

        Args:
            sector_id: "row-col" identifier
            tick: Refresh tick counter
            is_day: Daylight flag from the weather sample
            visibility: Visibility (m) from the weather sample

        Returns:
            Density clamped to [0, 100]
        """
        cfg = self._config
        row, col = (int(part) for part in sector_id.split("-"))

        # Drifting flow across the map, normalized to roughly 0-1
        flow = (math.sin(row * 0.5 + tick * 0.2) + math.cos(col * 0.5 + tick * 0.2) + 2) / 4
        density = flow * cfg.flow_amplitude

        if sector_id in cfg.town_sectors:
            density += cfg.town_bonus

        if not is_day:
            density *= cfg.night_factor
            if sector_id in cfg.crossing_sectors and tick % cfg.night_spike_period == 0:
                density += cfg.night_spike

        if visibility < cfg.fog_visibility:
            is_cover = row == 0 or col == 0 or col == self._cols - 1
            density += cfg.cover_bonus if is_cover else -cfg.open_penalty

        spike = 0.0
        if self._rng.random() < cfg.spike_probability:
            spike = self._rng.random() * cfg.spike_range + cfg.spike_min
        noise = self._rng.random() * (2 * cfg.noise) - cfg.noise

        return max(0.0, min(100.0, density + spike + noise))
