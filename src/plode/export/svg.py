"""
SVG export for graph layouts.

Generates SVG documents from layout results: a static drawing of one
position table, or an animated drawing that moves every node through a
recorded frame sequence. Layout coordinates are fitted onto the canvas by
a Viewport; an animation uses one Viewport for all of its frames so the
drawing never rescales mid-animation.

Self-loops are drawn as a small teardrop loop above their node, so every
edge of the input appears exactly once in the output.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import IO, TYPE_CHECKING, Iterable, Optional, Sequence, Union
from xml.sax.saxutils import escape

from ..graph import GraphView
from ..positions import FrameSequence, PositionTable
from ..types import Edge, NodeId
from ..validation import validate_edge_endpoints
from .style import SvgStyle
from .viewport import Viewport

if TYPE_CHECKING:
    from ..base import BaseLayout

EdgesLike = Union[GraphView, Iterable[Edge]]
SinkType = Union[str, "os.PathLike[str]", IO[str]]


def render_static(
    positions: PositionTable,
    edges: EdgesLike = (),
    style: Optional[SvgStyle] = None,
) -> str:
    """
    Render one position table to an SVG document.

    Edges are drawn first and nodes on top of them.

    Args:
        positions: Node positions in layout coordinates
        edges: Edge list, or a GraphView whose edges() are drawn
        style: Drawing options (defaults to SvgStyle())

    Returns:
        SVG string representation of the graph

    Raises:
        InvalidEdgeError: If an edge references a node without a position
    """
    style = style if style is not None else SvgStyle()
    edge_list = _edge_list(edges, positions)

    if len(positions) == 0:
        return _empty_svg(style.width, style.height, style.background)

    viewport = Viewport.for_positions(positions, style)
    canvas = viewport.transform_array(positions.array)

    def point(node: NodeId) -> tuple[float, float]:
        row = canvas[positions.index_of(node)]
        return float(row[0]), float(row[1])

    svg_parts = [_svg_open(style)]

    # Edges group
    svg_parts.append('  <g class="edges">')
    for src, tgt in edge_list:
        if src == tgt:
            svg_parts.append(_render_self_loop(point(src), style))
        else:
            svg_parts.append(_render_edge(point(src), point(tgt), style))
    svg_parts.append("  </g>")

    # Nodes group
    svg_parts.append('  <g class="nodes">')
    for node in positions:
        svg_parts.append(_render_node(point(node), style))
    svg_parts.append("  </g>")

    # Labels group
    if style.show_labels:
        svg_parts.append('  <g class="labels">')
        for node in positions:
            svg_parts.append(_render_label(node, point(node), style))
        svg_parts.append("  </g>")

    svg_parts.append("</svg>")

    return "\n".join(svg_parts)


def render_animated(
    frames: FrameSequence,
    edges: EdgesLike = (),
    style: Optional[SvgStyle] = None,
) -> str:
    """
    Render a frame sequence as an animated SVG document.

    Each node group is translated through its recorded positions and each
    edge's endpoints follow their nodes, over style.duration seconds. Key
    times are proportional to the frames' iteration numbers, so frames
    recorded at a stride still play at the pace of the simulation.

    Args:
        frames: Recorded frames, all covering the same nodes
        edges: Edge list, or a GraphView whose edges() are drawn
        style: Drawing options (defaults to SvgStyle())

    Returns:
        SVG string with SMIL animation elements
    """
    style = style if style is not None else SvgStyle()

    if len(frames) == 0 or len(frames.nodes) == 0:
        return _empty_svg(style.width, style.height, style.background)

    first = frames[0].positions
    edge_list = _edge_list(edges, first)

    # One viewport for the whole sequence
    viewport = Viewport.for_frames(frames, style)
    tracks = [viewport.transform_array(frame.positions.array) for frame in frames]
    key_times = _key_times(frames.iterations)
    animated = len(frames) > 1

    def track(node: NodeId) -> list[tuple[float, float]]:
        i = first.index_of(node)
        return [(float(t[i, 0]), float(t[i, 1])) for t in tracks]

    svg_parts = [_svg_open(style)]

    svg_parts.append('  <g class="edges">')
    for src, tgt in edge_list:
        src_track = track(src)
        if src == tgt:
            x, y = src_track[0]
            loop = _render_self_loop((0.0, 0.0), style, close=False)
            svg_parts.append(f'{loop} transform="translate({_fmt(x)} {_fmt(y)})">')
            if animated:
                svg_parts.append(_animate_translate(src_track, key_times, style))
            svg_parts.append("    </path>")
            continue

        tgt_track = track(tgt)
        line = _render_edge(src_track[0], tgt_track[0], style, close=False)
        svg_parts.append(f"{line}>")
        if animated:
            for name, values in (
                ("x1", [p[0] for p in src_track]),
                ("y1", [p[1] for p in src_track]),
                ("x2", [p[0] for p in tgt_track]),
                ("y2", [p[1] for p in tgt_track]),
            ):
                svg_parts.append(_animate_attribute(name, values, key_times, style))
        svg_parts.append("    </line>")
    svg_parts.append("  </g>")

    svg_parts.append('  <g class="nodes">')
    for node in first:
        node_track = track(node)
        x, y = node_track[0]
        svg_parts.append(f'    <g class="node-track" transform="translate({_fmt(x)} {_fmt(y)})">')
        svg_parts.append("  " + _render_node((0.0, 0.0), style))
        if style.show_labels:
            svg_parts.append("  " + _render_label(node, (0.0, 0.0), style))
        if animated:
            svg_parts.append(_animate_translate(node_track, key_times, style))
        svg_parts.append("    </g>")
    svg_parts.append("  </g>")

    svg_parts.append("</svg>")

    return "\n".join(svg_parts)


def to_svg(
    layout: BaseLayout,
    style: Optional[SvgStyle] = None,
    *,
    animated: bool = False,
) -> str:
    """
    Export a layout engine's last result to SVG.

    Args:
        layout: A layout engine after run()
        style: Drawing options
        animated: Render the recorded frames instead of the final positions

    Raises:
        ValueError: If animated output is requested but no frames were recorded
    """
    graph = layout.graph
    edges: Sequence[Edge] = graph.edges() if graph is not None else ()
    if animated:
        if layout.frames is None:
            raise ValueError("Layout did not record frames; enable record_frames")
        return render_animated(layout.frames, edges, style)
    return render_static(layout.positions, edges, style)


def save_svg(document: str, sink: SinkType) -> None:
    """
    Write an SVG document to a file path or a writable text stream.

    Args:
        document: SVG markup
        sink: Path (str or PathLike) or object with a write(str) method
    """
    if isinstance(sink, (str, os.PathLike)):
        Path(sink).write_text(document, encoding="utf-8")
    else:
        sink.write(document)


def _edge_list(edges: EdgesLike, positions: PositionTable) -> list[Edge]:
    """Materialize edges and check every endpoint has a position."""
    if isinstance(edges, GraphView):
        edge_list = list(edges.edges())
    else:
        edge_list = [(src, tgt) for src, tgt in edges]
    validate_edge_endpoints(edge_list, positions, strict=True)
    return edge_list


def _svg_open(style: SvgStyle) -> str:
    header = (
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'width="{style.width:.1f}" height="{style.height:.1f}" '
        f'viewBox="0 0 {style.width:.1f} {style.height:.1f}">'
    )
    if style.background:
        header += (
            f'\n  <rect width="100%" height="100%" fill="{_attr(style.background)}"/>'
        )
    return header


def _empty_svg(width: float, height: float, background: Optional[str]) -> str:
    """Create an empty SVG."""
    bg = ""
    if background:
        bg = f'\n  <rect width="100%" height="100%" fill="{_attr(background)}"/>'
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'width="{width:.1f}" height="{height:.1f}" '
        f'viewBox="0 0 {width:.1f} {height:.1f}">{bg}\n</svg>'
    )


def _render_edge(
    src: tuple[float, float],
    tgt: tuple[float, float],
    style: SvgStyle,
    close: bool = True,
) -> str:
    """Render a straight edge. With close=False the tag is left open for children."""
    tag = (
        f'    <line class="edge" x1="{_fmt(src[0])}" y1="{_fmt(src[1])}" '
        f'x2="{_fmt(tgt[0])}" y2="{_fmt(tgt[1])}" '
        f'stroke="{_attr(style.edge_color)}" stroke-width="{style.edge_width:g}"'
    )
    return tag + "/>" if close else tag


def _render_self_loop(
    at: tuple[float, float],
    style: SvgStyle,
    close: bool = True,
) -> str:
    """Render a self-loop as a teardrop curve leaving and re-entering the node."""
    size = max(style.node_radius, 4.0) * 1.5
    x, y = at
    d = (
        f"M {_fmt(x)} {_fmt(y)} "
        f"c {_fmt(-size)} {_fmt(-2 * size)} {_fmt(size)} {_fmt(-2 * size)} 0 0"
    )
    tag = (
        f'    <path class="edge self-loop" d="{d}" fill="none" '
        f'stroke="{_attr(style.edge_color)}" stroke-width="{style.edge_width:g}"'
    )
    return tag + "/>" if close else tag


def _render_node(at: tuple[float, float], style: SvgStyle) -> str:
    """Render a node."""
    return (
        f'    <circle class="node" cx="{_fmt(at[0])}" cy="{_fmt(at[1])}" '
        f'r="{_fmt(style.node_radius)}" '
        f'fill="{_attr(style.node_color)}" stroke="{_attr(style.node_stroke)}" '
        f'stroke-width="{style.node_stroke_width:g}"/>'
    )


def _render_label(node: NodeId, at: tuple[float, float], style: SvgStyle) -> str:
    """Render a node label."""
    return (
        f'    <text x="{_fmt(at[0])}" y="{_fmt(at[1])}" '
        f'fill="{_attr(style.label_color)}" font-size="{style.font_size:g}" '
        f'font-family="{_attr(style.font_family)}" '
        f'text-anchor="middle" dominant-baseline="central">'
        f"{escape(str(node))}</text>"
    )


def _animate_attribute(
    name: str,
    values: Sequence[float],
    key_times: Sequence[float],
    style: SvgStyle,
) -> str:
    return (
        f'      <animate attributeName="{name}" '
        f'values="{";".join(_fmt(v) for v in values)}" '
        f'{_timing(key_times, style)}/>'
    )


def _animate_translate(
    track: Sequence[tuple[float, float]],
    key_times: Sequence[float],
    style: SvgStyle,
) -> str:
    values = ";".join(f"{_fmt(x)} {_fmt(y)}" for x, y in track)
    return (
        f'      <animateTransform attributeName="transform" type="translate" '
        f'values="{values}" {_timing(key_times, style)}/>'
    )


def _timing(key_times: Sequence[float], style: SvgStyle) -> str:
    timing = (
        f'keyTimes="{";".join(f"{t:.4f}" for t in key_times)}" '
        f'dur="{style.duration:g}s" fill="freeze"'
    )
    if style.repeat:
        timing += ' repeatCount="indefinite"'
    return timing


def _key_times(iterations: Sequence[int]) -> list[float]:
    """Key times in [0, 1] proportional to the iteration of each frame."""
    if len(iterations) < 2:
        return [0.0] * len(iterations)
    start, end = iterations[0], iterations[-1]
    span = end - start
    times = [(it - start) / span for it in iterations]
    times[-1] = 1.0
    return times


def _fmt(value: float) -> str:
    return f"{value:.2f}"


def _attr(value: str) -> str:
    return escape(str(value), {'"': "&quot;"})


__all__ = [
    "render_static",
    "render_animated",
    "to_svg",
    "save_svg",
]
