"""
One-parameter-at-a-time erosion experiments.

Starting from a fixed base parameter set, each run varies a single
parameter, erodes a fresh copy of the original terrain and writes
snapshots to its own directory.
"""

from pathlib import Path
from typing import Dict, Iterator, List, NamedTuple, Optional, Sequence, Union

import structlog

from ..core.erosion import ErosionEngine
from ..core.height_grid import HeightGrid
from ..core.parameters import ErosionParameters
from ..export.heightmap_image import PngSnapshotWriter, save_heightmap_png

logger = structlog.get_logger()

PARAMETER_VARIATIONS: Dict[str, List[float]] = {
    "inertia": [0.001, 0.01, 0.1, 0.5],
    "min_slope": [0.001, 0.01, 0.1],
    "capacity": [4, 6, 32],
    "deposition_rate": [0.001, 0.01, 0.1, 0.5],
    "erosion_rate": [0.001, 0.01, 0.1, 0.5],
    "gravity": [9.81, 1.0],
    "evaporation": [0.001, 0.01, 0.1, 0.2, 0.5],
    "radius": [1, 2, 4, 8],
}


class SweepRun(NamedTuple):
    """A single experiment of the sweep."""

    name: str
    index: int
    parameters: ErosionParameters


def iter_sweep(
    base: ErosionParameters, variations: Dict[str, Sequence[float]]
) -> Iterator[SweepRun]:
    """Yield one run per value, each varying a single field of `base`."""
    for name, values in variations.items():
        if name not in ErosionParameters.model_fields:
            raise ValueError(f"Unknown erosion parameter: {name}")
        for index, value in enumerate(values):
            # Re-validate so out-of-range sweep values fail early
            params = ErosionParameters(**{**base.model_dump(), name: value})
            yield SweepRun(name, index, params)


class ParameterSweep:
    """Runs every sweep experiment against copies of one original terrain."""

    def __init__(
        self,
        output_dir: Union[str, Path],
        engine: ErosionEngine,
        num_drops: int = 100000,
        snapshot_every: Optional[int] = 1000,
        base: Optional[ErosionParameters] = None,
        variations: Optional[Dict[str, Sequence[float]]] = None,
    ):
        self.output_dir = Path(output_dir)
        self.engine = engine
        self.num_drops = num_drops
        self.snapshot_every = snapshot_every
        self.base = base or ErosionParameters()
        self.variations = variations if variations is not None else PARAMETER_VARIATIONS

    def run_directory(self, run: SweepRun) -> Path:
        return self.output_dir / f"{run.name}_{run.index}"

    def snapshot_prefix(self, run: SweepRun) -> Path:
        return self.run_directory(run) / run.name

    def run(self, original: HeightGrid) -> List[SweepRun]:
        """
        Execute the sweep. `original` is never modified.

        Returns:
            The runs that were executed, in order
        """
        save_heightmap_png(original, self.output_dir / "original.png")

        executed = []
        for run in iter_sweep(self.base, self.variations):
            logger.info("Starting sweep run", parameter=run.name, index=run.index,
                        value=getattr(run.parameters, run.name))
            grid = original.copy()
            self.engine.run(
                grid,
                run.parameters,
                self.num_drops,
                snapshot_every=self.snapshot_every or None,
                on_snapshot=PngSnapshotWriter(self.snapshot_prefix(run)),
            )
            executed.append(run)

        logger.info("Sweep completed", runs=len(executed))
        return executed
