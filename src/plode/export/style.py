"""
Styling options for SVG rendering.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..validation import (
    InvalidCanvasSizeError,
    validate_canvas_size,
    validate_margin,
)


@dataclass(frozen=True)
class SvgStyle:
    """
    Canvas and drawing options shared by static and animated rendering.

    Attributes:
        width: Canvas width in pixels
        height: Canvas height in pixels
        margin: Space kept free on every side of the canvas
        node_radius: Radius for circular nodes
        node_color: Fill color for nodes
        node_stroke: Stroke color for nodes
        node_stroke_width: Stroke width for nodes
        edge_color: Color for edges
        edge_width: Width for edges
        show_labels: Whether to show node labels
        label_color: Color for labels
        font_size: Font size for labels
        font_family: Font family for labels
        background: Background color (None for transparent)
        duration: Total animation duration in seconds
        repeat: Loop the animation instead of freezing on the last frame
    """

    width: float = 800.0
    height: float = 800.0
    margin: float = 40.0
    node_radius: float = 12.0
    node_color: str = "#4a90d9"
    node_stroke: str = "#2c5aa0"
    node_stroke_width: float = 2.0
    edge_color: str = "#666666"
    edge_width: float = 1.5
    show_labels: bool = True
    label_color: str = "#000000"
    font_size: float = 10.0
    font_family: str = "sans-serif"
    background: Optional[str] = None
    duration: float = 10.0
    repeat: bool = False

    def __post_init__(self) -> None:
        width, height = validate_canvas_size((self.width, self.height))
        object.__setattr__(self, "width", width)
        object.__setattr__(self, "height", height)
        object.__setattr__(self, "margin", validate_margin(self.margin, width, height))
        if self.node_radius < 0:
            raise InvalidCanvasSizeError(f"Node radius must be non-negative, got {self.node_radius}")
        if not self.duration > 0:
            raise InvalidCanvasSizeError(
                f"Animation duration must be positive, got {self.duration}"
            )


__all__ = ["SvgStyle"]
