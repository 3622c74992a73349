#!/usr/bin/env python3
"""
Generate a bump terrain and run the full erosion parameter sweep.

Each erosion parameter is varied in turn while the others keep their
default values. Every run erodes a copy of the same original terrain and
writes periodic snapshots under the output directory.

Usage:
    python generate_erosion_sweep.py [seed]

Without a seed, EROSION_SEED is used, or a fresh one is drawn.
"""

import sys

import structlog

from py_erosion.config import settings
from py_erosion.core import ErosionEngine, RandomStream, TerrainConfig, TerrainGenerator
from py_erosion.experiments import ParameterSweep
from py_erosion.logging_config import configure_logging


def main(argv):
    configure_logging(settings.log_level, settings.log_format)
    logger = structlog.get_logger()

    seed = int(argv[1]) if len(argv) > 1 else settings.seed
    stream = RandomStream(seed)
    logger.info("Random stream ready", entropy=stream.entropy)

    config = TerrainConfig(
        width=settings.map_width,
        height=settings.map_height,
        num_bumps=settings.num_bumps,
        scale=settings.bump_scale,
    )
    original = TerrainGenerator(stream).generate(config)

    sweep = ParameterSweep(
        settings.output_dir,
        ErosionEngine(stream),
        num_drops=settings.num_drops,
        snapshot_every=settings.snapshot_every,
    )
    sweep.run(original)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
