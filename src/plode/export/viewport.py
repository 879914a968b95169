"""
Mapping layout coordinates onto a canvas.

Layout coordinates are unbounded floats; a Viewport rescales and translates
them so their bounding box fills the drawable canvas area (canvas minus
margin) with a single scale factor on both axes, centred on the canvas.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from ..positions import BoundingBox, FrameSequence, PositionTable
from ..types import Coordinate
from .style import SvgStyle


class Viewport:
    """
    Uniform-scale transform from layout space to canvas space.

    A box with zero width or height is scaled along its other axis; a
    single point is drawn at the canvas centre with scale 1.

    Example:
        viewport = Viewport.for_positions(table, style)
        x, y = viewport.transform(*table["a"])
    """

    def __init__(
        self,
        bbox: Optional[BoundingBox],
        width: float,
        height: float,
        margin: float = 0.0,
    ) -> None:
        self.bbox = bbox
        self.width = float(width)
        self.height = float(height)
        self.margin = float(margin)

        avail_w = self.width - 2 * self.margin
        avail_h = self.height - 2 * self.margin

        if bbox is None:
            self.scale = 1.0
            src_cx, src_cy = 0.0, 0.0
        else:
            factors = []
            if bbox.width > 0:
                factors.append(avail_w / bbox.width)
            if bbox.height > 0:
                factors.append(avail_h / bbox.height)
            self.scale = min(factors) if factors else 1.0
            src_cx, src_cy = bbox.center

        self.offset_x = self.width / 2 - src_cx * self.scale
        self.offset_y = self.height / 2 - src_cy * self.scale

    @classmethod
    def for_positions(cls, positions: PositionTable, style: SvgStyle) -> Viewport:
        """Viewport fitting a single position table."""
        return cls(positions.bbox(), style.width, style.height, style.margin)

    @classmethod
    def for_frames(cls, frames: FrameSequence, style: SvgStyle) -> Viewport:
        """Viewport fitting every frame of a sequence at once."""
        return cls(frames.bbox(), style.width, style.height, style.margin)

    def transform(self, x: float, y: float) -> Coordinate:
        """Map one layout coordinate to canvas coordinates."""
        return (x * self.scale + self.offset_x, y * self.scale + self.offset_y)

    def transform_array(self, array: np.ndarray) -> np.ndarray:
        """Map an (n, 2) array of layout coordinates to canvas coordinates."""
        out = np.asarray(array, dtype=np.float64) * self.scale
        out[:, 0] += self.offset_x
        out[:, 1] += self.offset_y
        return out

    def __repr__(self) -> str:
        return (
            f"Viewport(scale={self.scale:.4g}, offset=({self.offset_x:.4g}, "
            f"{self.offset_y:.4g}), canvas={self.width:g}x{self.height:g})"
        )


__all__ = ["Viewport"]
