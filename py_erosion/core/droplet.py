"""
Water droplet state machine.

A droplet walks downhill one cell-length per step, eroding the terrain
while it has spare carrying capacity and depositing when it carries too
much. Moving uphill ends its life: it fills the climb with what it
carries and stops.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .height_grid import EPSILON, HeightGrid
from .parameters import ErosionParameters
from .random_stream import RandomStream

DROPLET_LIFETIME = 1000
MAX_DIRECTION_RESAMPLES = 1000


class DirectionResampleError(RuntimeError):
    """Raised when no usable direction was found within the retry cap."""


class TerminationReason(Enum):
    """Why a droplet stopped."""

    OUT_OF_BOUNDS = "out_of_bounds"
    LIFETIME_EXPIRED = "lifetime_expired"
    WATER_EXHAUSTED = "water_exhausted"
    DEPOSITED = "deposited"


@dataclass
class DropletResult:
    """Outcome of simulating one droplet to termination."""

    reason: TerminationReason
    steps: int
    eroded: float
    deposited: float


@dataclass
class Droplet:
    """Mutable state of one water-and-sediment particle."""

    position: Tuple[float, float]
    direction: Tuple[float, float] = (0.0, 0.0)
    lifetime: int = DROPLET_LIFETIME
    velocity: float = 1.0
    water: float = 1.0
    sediment: float = 0.0
    eroded: float = 0.0
    deposited: float = 0.0

    def is_valid(self, grid: HeightGrid) -> bool:
        """True while the droplet sits strictly inside the grid border."""
        x = math.floor(self.position[0])
        y = math.floor(self.position[1])
        return 0 < x < grid.width - 1 and 0 < y < grid.height - 1

    def termination_reason(self, grid: HeightGrid) -> Optional[TerminationReason]:
        """Reason the droplet can no longer step, or None if it is active."""
        if not self.is_valid(grid):
            return TerminationReason.OUT_OF_BOUNDS
        if self.lifetime <= 0:
            return TerminationReason.LIFETIME_EXPIRED
        if self.water <= EPSILON:
            return TerminationReason.WATER_EXHAUSTED
        return None

    def _next_direction(
        self, grid: HeightGrid, params: ErosionParameters, stream: RandomStream
    ) -> Tuple[float, float]:
        gx, gy = grid.gradient(self.position)
        nx = self.direction[0] * params.inertia - gx * (1.0 - params.inertia)
        ny = self.direction[1] * params.inertia - gy * (1.0 - params.inertia)
        norm = math.hypot(nx, ny)

        attempts = 0
        while norm <= EPSILON:
            if attempts >= MAX_DIRECTION_RESAMPLES:
                raise DirectionResampleError(
                    f"No usable direction at {self.position} after {attempts} resamples"
                )
            nx = stream.uniform()
            ny = stream.uniform()
            norm = math.hypot(nx, ny)
            attempts += 1

        return (nx / norm, ny / norm)

    def _fill(self, grid: HeightGrid, position: Tuple[float, float], amount: float) -> float:
        """Deposit `amount` at `position`, re-issuing any floating residue."""
        placed = grid.deposit(position, amount)
        remaining = amount - placed
        while remaining > EPSILON:
            dropped = grid.deposit(position, remaining)
            if dropped <= 0.0:
                break
            placed += dropped
            remaining -= dropped
        return placed

    def step(
        self, grid: HeightGrid, params: ErosionParameters, stream: RandomStream
    ) -> Optional[TerminationReason]:
        """
        Advance the droplet by one cell-length.

        Args:
            grid: Terrain, mutated in place
            params: Erosion parameters
            stream: Random source for resampling a degenerate direction

        Returns:
            The termination reason, or None if the droplet is still active
        """
        self.lifetime -= 1

        self.direction = self._next_direction(grid, params, stream)

        old_pos = self.position
        self.position = (old_pos[0] + self.direction[0], old_pos[1] + self.direction[1])
        if not self.is_valid(grid):
            return TerminationReason.OUT_OF_BOUNDS

        h_diff = grid.sample(
            int(self.position[0]), int(self.position[1])
        ) - grid.sample(int(old_pos[0]), int(old_pos[1]))

        if h_diff > 0.0:
            # Uphill: fill the climb with what we carry and stop
            placed = self._fill(grid, old_pos, min(self.sediment, h_diff))
            self.sediment -= placed
            self.deposited += placed
            return TerminationReason.DEPOSITED

        c = max(-h_diff, params.min_slope) * self.velocity * self.water * params.capacity
        if self.sediment >= c:
            dropped = grid.deposit(old_pos, (self.sediment - c) * params.deposition_rate)
            self.sediment -= dropped
            self.deposited += dropped
        else:
            gain = min((c - self.sediment) * params.erosion_rate, -h_diff)
            gained = grid.erode(old_pos, gain, params.radius)
            self.sediment += gained
            self.eroded += gained

        self.velocity = math.sqrt(self.velocity * self.velocity + abs(h_diff) * params.gravity)
        self.water *= 1.0 - params.evaporation

        return self.termination_reason(grid)

    def simulate(
        self, grid: HeightGrid, params: ErosionParameters, stream: RandomStream
    ) -> DropletResult:
        """Step the droplet until it terminates."""
        steps = 0
        reason = self.termination_reason(grid)
        while reason is None:
            reason = self.step(grid, params, stream)
            steps += 1
        return DropletResult(reason=reason, steps=steps, eroded=self.eroded, deposited=self.deposited)
