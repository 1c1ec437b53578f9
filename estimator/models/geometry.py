"""Geometric primitives used throughout the estimator."""

from __future__ import annotations
from pydantic import BaseModel, ConfigDict


class Vector3(BaseModel):
    """Point or Euler rotation in building space (x along length, y across, z up)."""
    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


class Position2D(BaseModel):
    """Position of an opening on a wall face (x along the wall, z height)."""
    x: float = 0.0
    z: float = 0.0


ORIGIN = Vector3()
