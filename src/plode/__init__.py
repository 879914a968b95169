"""
plode: Force-directed graph layout with SVG rendering.

This package computes 2-D node positions for arbitrary graphs with the
Fruchterman-Reingold force-directed algorithm and renders the result as
SVG, either as a still image or as an animation of the simulation.

Available modules:
- force: Fruchterman-Reingold engine, force model, cooling schedules
- export: Static and animated SVG rendering
- adapters: GraphView adapters for third-party graph libraries
- metrics: Layout quality measures
"""

__version__ = "0.1.0"

# Base classes for building layouts
from .base import BaseLayout, IterativeLayout

# Configuration
from .config import CoolingShape, LayoutConfig

# Force-directed layout
from .force import (
    CoolingSchedule,
    ForceModel,
    FruchtermanReingoldLayout,
    LinearCooling,
    PolynomialCooling,
    layout,
    layout_with_frames,
    make_schedule,
)

# Graph views
from .graph import EdgeListGraph, GraphView, IndexedGraph

# Positions and recorded frames
from .positions import BoundingBox, Frame, FrameSequence, PositionTable

# Shared types
from .types import Coordinate, Edge, Event, EventType, LayoutState, NodeId

# Validation utilities
from .validation import (
    InvalidCanvasSizeError,
    InvalidConfigError,
    InvalidEdgeError,
    InvalidPositionsError,
    NumericalInstabilityError,
    ValidationError,
)

__all__ = [
    # Version
    "__version__",
    # Shared types
    "NodeId",
    "Edge",
    "Coordinate",
    "EventType",
    "Event",
    "LayoutState",
    # Graph views
    "GraphView",
    "EdgeListGraph",
    "IndexedGraph",
    # Positions
    "BoundingBox",
    "PositionTable",
    "Frame",
    "FrameSequence",
    # Configuration
    "LayoutConfig",
    "CoolingShape",
    # Base classes
    "BaseLayout",
    "IterativeLayout",
    # Force-directed layout
    "FruchtermanReingoldLayout",
    "ForceModel",
    "CoolingSchedule",
    "LinearCooling",
    "PolynomialCooling",
    "make_schedule",
    "layout",
    "layout_with_frames",
    # Validation
    "ValidationError",
    "InvalidConfigError",
    "InvalidEdgeError",
    "InvalidPositionsError",
    "InvalidCanvasSizeError",
    "NumericalInstabilityError",
]
