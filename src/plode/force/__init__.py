"""
Force-directed layout.

This module provides the Fruchterman-Reingold layout and its parts:
- FruchtermanReingoldLayout: the iterative layout engine
- ForceModel: repulsion/attraction displacement per iteration
- Cooling schedules: per-iteration temperature (maximum displacement)
"""

from .cooling import CoolingSchedule, LinearCooling, PolynomialCooling, make_schedule
from .fruchterman_reingold import FruchtermanReingoldLayout, layout, layout_with_frames
from .model import ForceModel

__all__ = [
    "FruchtermanReingoldLayout",
    "layout",
    "layout_with_frames",
    "ForceModel",
    "CoolingSchedule",
    "LinearCooling",
    "PolynomialCooling",
    "make_schedule",
]
