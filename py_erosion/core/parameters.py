"""Physical parameters of one erosion run."""

from pydantic import BaseModel, ConfigDict, Field

from .height_grid import EPSILON


class ErosionParameters(BaseModel):
    """Erosion parameters, immutable for the duration of a run."""

    model_config = ConfigDict(frozen=True)

    inertia: float = Field(
        default=0.1, ge=0.0, le=1.0, description="Share of the previous direction kept each step"
    )
    min_slope: float = Field(
        default=0.001, gt=EPSILON, description="Lower bound on slope in the capacity formula"
    )
    capacity: float = Field(default=32.0, gt=0.0, description="Sediment capacity factor")
    deposition_rate: float = Field(
        default=0.001, ge=0.0, le=1.0, description="Share of surplus sediment dropped per step"
    )
    erosion_rate: float = Field(
        default=0.1, ge=0.0, le=1.0, description="Share of free capacity eroded per step"
    )
    gravity: float = Field(default=9.81, gt=0.0, description="Gravitational acceleration")
    evaporation: float = Field(
        default=0.002, ge=0.0, le=0.5, description="Share of water evaporated per step"
    )
    radius: int = Field(default=4, ge=1, description="Erosion disc radius in cells")
