"""
Diagram Export
==============

Rasterizes the full laid-out diagram to a JPEG and presents it in a
new viewing surface (an HTML page opened in the browser).

CONTRACT:
=========
- Whole diagram extent, not a viewport
- Fixed upscaling factor, solid background, maximum quality
- If the viewing surface cannot be opened the caller gets a
  notice back; nothing is raised
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Optional, Tuple
import base64
import html
import io
import logging
import math
import os
import tempfile
import webbrowser

from PIL import Image, ImageDraw, ImageFont

from backend.contracts.base import Error, ErrorCode
from backend.contracts.graph import GraphModel, LayoutResult
from frontend.visualization.graph import (
    NodeStyle, EdgeStyle, DEFAULT_NODE_STYLE, DEFAULT_EDGE_STYLE
)

logger = logging.getLogger(__name__)

POPUP_BLOCKED_NOTICE = "Popup blocked. Please allow popups to view the exported image."

# Largest side a JPEG can encode
MAX_JPEG_SIDE = 65500

Opener = Callable[[str], bool]


@dataclass(frozen=True)
class ExportConfig:
    scale: float = 2.0
    background: str = "white"
    quality: int = 100
    margin: float = 10.0
    title: str = "Story Graph Image"
    alt_text: str = "Story Graph"
    output_dir: Optional[str] = None
    filename: str = "story_graph.html"

    @classmethod
    def from_env(cls) -> ExportConfig:
        return cls(output_dir=os.environ.get("STORYGRAPH_EXPORT_DIR"))


@dataclass(frozen=True)
class ExportOutcome:
    """What happened to one export request."""
    data_uri: str
    html_path: Optional[str]
    opened: bool
    notice: Optional[Error] = None


class JpegExporter:
    """Draws nodes, edges and labels with Pillow."""

    def __init__(
        self,
        config: Optional[ExportConfig] = None,
        node_style: NodeStyle = DEFAULT_NODE_STYLE,
        edge_style: EdgeStyle = DEFAULT_EDGE_STYLE
    ):
        self._config = config or ExportConfig()
        self._node_style = node_style
        self._edge_style = edge_style

    def effective_scale(self, layout: LayoutResult) -> float:
        """
        Configured scale, reduced so that neither side of the canvas
        exceeds MAX_JPEG_SIDE.
        """
        bb = layout.bounding_box
        margin = self._config.margin
        longest = max(bb.width, bb.height) + 2 * margin
        scale = self._config.scale
        if longest > 0 and math.ceil(longest * scale) > MAX_JPEG_SIDE:
            scale = math.floor(MAX_JPEG_SIDE / longest * 1000) / 1000
            logger.warning(
                "Diagram too large for JPEG at scale %s; exporting at scale %s",
                self._config.scale, scale
            )
        return scale

    def canvas_size(self, layout: LayoutResult) -> Tuple[int, int]:
        bb = layout.bounding_box
        scale = self.effective_scale(layout)
        margin = self._config.margin
        return (
            max(1, math.ceil((bb.width + 2 * margin) * scale)),
            max(1, math.ceil((bb.height + 2 * margin) * scale)),
        )

    def render(self, model: GraphModel, layout: LayoutResult) -> bytes:
        cfg = self._config
        bb = layout.bounding_box
        scale = self.effective_scale(layout)

        def to_px(x: float, y: float) -> Tuple[float, float]:
            return (x - bb.x1 + cfg.margin) * scale, (y - bb.y1 + cfg.margin) * scale

        image = Image.new("RGB", self.canvas_size(layout), cfg.background)
        draw = ImageDraw.Draw(image)
        placements = layout.placement_map()
        radius = self._node_style.width / 2 * scale
        line_width = max(1, round(self._edge_style.width * scale))

        for edge in model.edges:
            src = placements.get(edge.source)
            dst = placements.get(edge.destination)
            if src is None or dst is None:
                continue
            start, end = to_px(src.x, src.y), to_px(dst.x, dst.y)
            if edge.source == edge.destination:
                self._draw_loop(draw, end, radius, line_width)
            else:
                self._draw_arrow(draw, start, end, radius, line_width)

        font = ImageFont.load_default(size=max(1, round(self._node_style.font_size * scale)))
        drawn = set()
        for node in model.nodes:
            placement = placements.get(node.id)
            if placement is None or node.id in drawn:
                continue
            drawn.add(node.id)
            cx, cy = to_px(placement.x, placement.y)
            draw.ellipse(
                [(cx - radius, cy - radius), (cx + radius, cy + radius)],
                fill=self._node_style.background_color
            )
            draw.text(
                (cx, cy),
                node.label,
                font=font,
                anchor="mm",
                fill=self._node_style.label_color,
                stroke_width=round(self._node_style.text_outline_width * scale),
                stroke_fill=self._node_style.text_outline_color,
            )

        buffer = io.BytesIO()
        image.save(buffer, format="JPEG", quality=cfg.quality, subsampling=0)
        return buffer.getvalue()

    def _draw_arrow(self, draw: ImageDraw.ImageDraw, start, end, radius: float, width: int) -> None:
        dx, dy = end[0] - start[0], end[1] - start[1]
        length = math.hypot(dx, dy)
        if length <= radius:
            return
        ux, uy = dx / length, dy / length

        # Arrow tip sits on the destination circle
        tip = (end[0] - ux * radius, end[1] - uy * radius)
        size = 4 * width
        base = (tip[0] - ux * size, tip[1] - uy * size)
        left = (base[0] - uy * size / 2, base[1] + ux * size / 2)
        right = (base[0] + uy * size / 2, base[1] - ux * size / 2)

        draw.line([start, base], fill=self._edge_style.line_color, width=width)
        draw.polygon([tip, left, right], fill=self._edge_style.arrow_color)

    def _draw_loop(self, draw: ImageDraw.ImageDraw, center, radius: float, width: int) -> None:
        cx, cy = center
        draw.ellipse(
            [(cx, cy - 2 * radius), (cx + 2 * radius, cy)],
            outline=self._edge_style.line_color,
            width=width
        )


def to_data_uri(jpeg_bytes: bytes) -> str:
    return "data:image/jpeg;base64," + base64.b64encode(jpeg_bytes).decode("ascii")


class ExportPresenter:
    """
    Opens the exported image in a new viewing surface.

    The opener returns False (or raises) when it cannot open a surface;
    that is reported on the outcome, never raised.
    """

    def __init__(self, config: Optional[ExportConfig] = None, opener: Optional[Opener] = None):
        self._config = config or ExportConfig()
        self._opener = opener or webbrowser.open

    def render_document(self, data_uri: str) -> str:
        cfg = self._config
        return (
            "<!DOCTYPE html>\n"
            "<html>\n"
            f"<head><meta charset=\"utf-8\"><title>{html.escape(cfg.title)}</title></head>\n"
            f"<body><img src=\"{data_uri}\" alt=\"{html.escape(cfg.alt_text)}\" /></body>\n"
            "</html>\n"
        )

    def present(self, data_uri: str) -> ExportOutcome:
        cfg = self._config
        output_dir = cfg.output_dir or tempfile.mkdtemp(prefix="storygraph_")

        try:
            os.makedirs(output_dir, exist_ok=True)
            html_path = os.path.join(output_dir, cfg.filename)
            with open(html_path, "w", encoding="utf-8") as f:
                f.write(self.render_document(data_uri))
        except OSError as e:
            logger.warning("Could not write export document: %s", e)
            return self._blocked(data_uri, None)

        try:
            opened = bool(self._opener("file://" + os.path.abspath(html_path)))
        except (webbrowser.Error, OSError) as e:
            logger.warning("Viewing surface failed to open: %s", e)
            opened = False

        if not opened:
            return self._blocked(data_uri, html_path)

        logger.info("Exported diagram to %s", html_path)
        return ExportOutcome(data_uri=data_uri, html_path=html_path, opened=True)

    def _blocked(self, data_uri: str, html_path: Optional[str]) -> ExportOutcome:
        logger.warning(POPUP_BLOCKED_NOTICE)
        return ExportOutcome(
            data_uri=data_uri,
            html_path=html_path,
            opened=False,
            notice=Error.now(ErrorCode.EXPORT_SURFACE_UNAVAILABLE, POPUP_BLOCKED_NOTICE),
        )
