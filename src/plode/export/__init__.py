"""
Export functionality for layout results.

This module renders layouts as SVG documents:
- render_static: one position table
- render_animated: a recorded frame sequence, as an animated SVG
- to_svg: convenience wrapper taking a layout engine after run()
- save_svg: write a document to a path or text stream

Example usage:
    from plode import EdgeListGraph, FruchtermanReingoldLayout, LayoutConfig
    from plode.export import SvgStyle, save_svg, to_svg

    graph = EdgeListGraph([(i, (i + 1) % 5) for i in range(5)])
    engine = FruchtermanReingoldLayout(
        config=LayoutConfig(seed=1, record_frames=True, frame_stride=5)
    ).run(graph)

    save_svg(to_svg(engine, SvgStyle(width=400, height=400)), "graph.svg")
    save_svg(to_svg(engine, animated=True), "graph-animated.svg")
"""

from .style import SvgStyle
from .svg import render_animated, render_static, save_svg, to_svg
from .viewport import Viewport

__all__ = [
    "SvgStyle",
    "Viewport",
    "render_static",
    "render_animated",
    "to_svg",
    "save_svg",
]
