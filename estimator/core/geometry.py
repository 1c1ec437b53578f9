"""Roof geometry shared by engines, strategies and reports."""

from __future__ import annotations
import math


def calculate_rafter_length(span: float, slope: float) -> float:
    """Sloped length of a rafter spanning `span` at `slope` percent."""
    rise = span * slope / 100
    return math.sqrt(span * span + rise * rise)


def calculate_height_ridge(height_wall: float, span: float, slope: float) -> float:
    return height_wall + span * slope / 100
