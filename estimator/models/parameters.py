"""Construction parameters and tunable estimation settings."""

from __future__ import annotations
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class ParameterOverrides(BaseModel):
    """Caller-supplied parameters; unset fields fall back to the engine defaults."""
    model_config = ConfigDict(frozen=True)

    post_spacing: Optional[float] = Field(default=None, gt=0)
    purlin_spacing: Optional[float] = Field(default=None, gt=0)
    rail_spacing: Optional[float] = Field(default=None, gt=0)
    post_profile: Optional[str] = None
    rafter_profile: Optional[str] = None
    purlin_profile: Optional[str] = None
    rail_profile: Optional[str] = None
    steel_grade: Optional[str] = None
    include_gutters: Optional[bool] = None
    include_downspouts: Optional[bool] = None


class BuildingParameters(BaseModel):
    """Resolved construction parameters (entraxes in mm, profile designations)."""
    model_config = ConfigDict(frozen=True)

    post_spacing: float = 5000
    purlin_spacing: float = 1500
    rail_spacing: float = 1200
    post_profile: str = "IPE 240"
    rafter_profile: str = "IPE 200"
    purlin_profile: str = "IPE 140"
    rail_profile: str = "UAP 80"
    steel_grade: str = "S235"
    include_gutters: bool = True
    include_downspouts: bool = True

    def merged(self, overrides: Optional[ParameterOverrides]) -> BuildingParameters:
        """Return a copy where every explicitly set override wins."""
        if overrides is None:
            return self
        return self.model_copy(update=overrides.model_dump(exclude_none=True))


DEFAULT_PARAMETERS = BuildingParameters()


class EstimatorSettings(BaseModel):
    """Heuristic constants used by the calculations.

    These are simplifications, not physical law; callers may pass their own
    instance to engines and strategies.
    """
    model_config = ConfigDict(frozen=True)

    default_linear_weight: float = 30.0          # kg/m for unknown profiles
    inverter_rated_power: float = 50.0           # kW
    inverter_oversizing_ratio: float = 1.1       # DC/AC
    inverter_manufacturer: str = "Huawei"
    inverter_efficiency: float = 98.6            # %
    inverter_mppt: int = 4
    carbon_factor: float = 0.057                 # kg CO2 per kWh
    performance_ratio: float = 0.80
    base_specific_yield: float = 1000.0          # kWh/kWc/year
    southern_specific_yield: float = 1300.0      # latitude < 40°
    northern_specific_yield: float = 900.0       # latitude > 50°
    base_snow_load: float = 0.45                 # kN/m²
    base_wind_pressure: float = 0.8              # kN/m²
    minimum_canopy_power: float = 10.0           # kWc


DEFAULT_SETTINGS = EstimatorSettings()
