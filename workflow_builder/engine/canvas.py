"""Canvas geometry: pan, zoom, node dragging and connection paths."""

from __future__ import annotations

from dataclasses import dataclass, field

from .node_registry import NODE_HEIGHT, NODE_WIDTH
from .types import NodePosition

MIN_ZOOM = 0.5
MAX_ZOOM = 2.0
ZOOM_STEP = 0.1
GRID_SIZE = 20
MAX_CONTROL_OFFSET = 100.0


@dataclass
class Point:
    x: float
    y: float


@dataclass
class CanvasState:
    """Viewport over the canvas: screen = canvas * zoom + offset."""

    offset: Point = field(default_factory=lambda: Point(0.0, 0.0))
    zoom: float = 1.0

    # Pointer interaction state
    pan_start: Point | None = None
    dragged_node_id: str | None = None
    drag_offset: Point = field(default_factory=lambda: Point(0.0, 0.0))

    def set_zoom(self, zoom: float) -> float:
        self.zoom = round(min(max(zoom, MIN_ZOOM), MAX_ZOOM), 2)
        return self.zoom

    def zoom_in(self) -> float:
        return self.set_zoom(self.zoom + ZOOM_STEP)

    def zoom_out(self) -> float:
        return self.set_zoom(self.zoom - ZOOM_STEP)

    def fit_to_screen(self) -> None:
        self.zoom = 1.0
        self.offset = Point(0.0, 0.0)

    @property
    def zoom_percent(self) -> int:
        return round(self.zoom * 100)

    @property
    def grid_size(self) -> float:
        """Background grid spacing in screen pixels."""
        return GRID_SIZE * self.zoom

    def screen_to_canvas(self, client: Point, origin: Point | None = None) -> Point:
        """Convert a pointer position to canvas coordinates."""
        origin = origin or Point(0.0, 0.0)
        return Point(
            (client.x - origin.x - self.offset.x) / self.zoom,
            (client.y - origin.y - self.offset.y) / self.zoom,
        )

    def canvas_to_screen(self, point: Point, origin: Point | None = None) -> Point:
        origin = origin or Point(0.0, 0.0)
        return Point(
            point.x * self.zoom + self.offset.x + origin.x,
            point.y * self.zoom + self.offset.y + origin.y,
        )

    def drop_position(self, client: Point, origin: Point | None = None) -> NodePosition:
        """Top-left corner for a node dropped from the palette, centered on the pointer."""
        p = self.screen_to_canvas(client, origin)
        return NodePosition(x=p.x - NODE_WIDTH / 2, y=p.y - NODE_HEIGHT / 2)

    # --- Panning ---

    def begin_pan(self, client: Point) -> None:
        self.pan_start = Point(client.x - self.offset.x, client.y - self.offset.y)

    def pan_to(self, client: Point) -> Point:
        if self.pan_start is not None:
            self.offset = Point(client.x - self.pan_start.x, client.y - self.pan_start.y)
        return self.offset

    # --- Node dragging ---

    def begin_drag(
        self,
        node_id: str,
        node_position: NodePosition,
        client: Point,
        origin: Point | None = None,
    ) -> None:
        """Start dragging a node, remembering where on the node it was grabbed."""
        p = self.screen_to_canvas(client, origin)
        self.drag_offset = Point(p.x - node_position.x, p.y - node_position.y)
        self.dragged_node_id = node_id

    def drag_to(self, client: Point, origin: Point | None = None) -> NodePosition | None:
        """New position of the dragged node, or None when nothing is dragged."""
        if self.dragged_node_id is None:
            return None
        p = self.screen_to_canvas(client, origin)
        return NodePosition(x=p.x - self.drag_offset.x, y=p.y - self.drag_offset.y)

    def end_interaction(self) -> None:
        self.pan_start = None
        self.dragged_node_id = None


def output_port(position: NodePosition) -> Point:
    """Right-middle anchor of a node."""
    return Point(position.x + NODE_WIDTH, position.y + NODE_HEIGHT / 2)


def input_port(position: NodePosition) -> Point:
    """Left-middle anchor of a node."""
    return Point(position.x, position.y + NODE_HEIGHT / 2)


def curve_path(start: Point, end: Point) -> str:
    """SVG cubic bezier with horizontal tangents at both ends."""
    control = min(abs(end.x - start.x) * 0.5, MAX_CONTROL_OFFSET)
    return (
        f"M {_fmt(start.x)} {_fmt(start.y)} "
        f"C {_fmt(start.x + control)} {_fmt(start.y)}, "
        f"{_fmt(end.x - control)} {_fmt(end.y)}, "
        f"{_fmt(end.x)} {_fmt(end.y)}"
    )


def connection_path(source: NodePosition, target: NodePosition) -> str:
    """Path from source's output port to target's input port."""
    return curve_path(output_port(source), input_port(target))


def _fmt(value: float) -> str:
    # 356.0 -> "356", 12.5 -> "12.5"
    if float(value).is_integer():
        return str(int(value))
    return str(round(value, 3))
