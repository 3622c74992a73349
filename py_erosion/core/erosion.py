"""
Particle-based hydraulic erosion.

The engine drops water particles at random positions and lets each one
run its state machine to termination, mutating the grid in place.
"""

from collections import Counter
from typing import Callable, Optional

import structlog

from .droplet import Droplet, DropletResult
from .height_grid import HeightGrid
from .parameters import ErosionParameters
from .random_stream import RandomStream

logger = structlog.get_logger()

# Called with the current grid and the 1-based index of the next drop
SnapshotCallback = Callable[[HeightGrid, int], None]


class ErosionEngine:
    """Drives droplets over a heightmap."""

    def __init__(self, stream: RandomStream):
        """
        Initialize the engine.

        Args:
            stream: Random source for drop positions and direction resampling
        """
        self.stream = stream

    def simulate_drop(self, grid: HeightGrid, params: ErosionParameters) -> DropletResult:
        """Spawn one fresh droplet at a random position and run it to termination."""
        drop = Droplet(position=self.stream.random_position(grid.width, grid.height))
        return drop.simulate(grid, params, self.stream)

    def run(
        self,
        grid: HeightGrid,
        params: ErosionParameters,
        num_drops: int,
        snapshot_every: Optional[int] = None,
        on_snapshot: Optional[SnapshotCallback] = None,
    ) -> None:
        """
        Erode `grid` in place with `num_drops` droplets.

        When `snapshot_every` is set, `on_snapshot` is called with the grid
        and the drop index before every drop whose index is a multiple of it.

        Args:
            grid: Terrain to erode
            params: Erosion parameters
            num_drops: Number of droplets to simulate
            snapshot_every: Snapshot interval in drops
            on_snapshot: Snapshot collaborator
        """
        if num_drops < 0:
            raise ValueError(f"num_drops must be non-negative, got {num_drops}")
        if grid.width <= 2 or grid.height <= 2:
            raise ValueError(f"Grid must be larger than 2x2, got {grid.width}x{grid.height}")
        if snapshot_every is not None:
            if snapshot_every < 1:
                raise ValueError(f"snapshot_every must be at least 1, got {snapshot_every}")
            if on_snapshot is None:
                raise ValueError("snapshot_every requires an on_snapshot callback")

        logger.info(
            "Starting erosion",
            width=grid.width,
            height=grid.height,
            num_drops=num_drops,
            snapshot_every=snapshot_every,
            **params.model_dump(),
        )

        reasons = Counter()
        total_eroded = 0.0
        total_deposited = 0.0
        for i in range(1, num_drops + 1):
            if snapshot_every is not None and i % snapshot_every == 0:
                logger.debug("Taking snapshot", drop=i)
                on_snapshot(grid, i)

            result = self.simulate_drop(grid, params)
            reasons[result.reason.value] += 1
            total_eroded += result.eroded
            total_deposited += result.deposited

        logger.info(
            "Erosion completed",
            num_drops=num_drops,
            eroded=total_eroded,
            deposited=total_deposited,
            terminations=dict(reasons),
        )
