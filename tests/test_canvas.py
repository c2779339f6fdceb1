"""
Unit tests for canvas geometry.
"""
import pytest

from workflow_builder.engine.canvas import (
    CanvasState,
    Point,
    connection_path,
    input_port,
    output_port,
)
from workflow_builder.engine.types import NodePosition


class TestZoom:
    """Tests for zoom handling."""

    def test_zoom_steps(self):
        canvas = CanvasState()

        assert canvas.zoom_in() == 1.1
        assert canvas.zoom_out() == 1.0
        assert canvas.zoom_percent == 100

    def test_zoom_clamped(self):
        canvas = CanvasState()

        for _ in range(30):
            canvas.zoom_in()
        assert canvas.zoom == 2.0

        for _ in range(30):
            canvas.zoom_out()
        assert canvas.zoom == 0.5

    def test_fit_to_screen_resets(self):
        canvas = CanvasState(offset=Point(40, -20), zoom=1.7)

        canvas.fit_to_screen()

        assert canvas.zoom == 1.0
        assert canvas.offset == Point(0.0, 0.0)

    def test_grid_scales_with_zoom(self):
        assert CanvasState(zoom=1.5).grid_size == 30


class TestCoordinates:
    """Tests for screen/canvas conversion."""

    def test_screen_to_canvas(self):
        canvas = CanvasState(offset=Point(100, 50), zoom=2.0)

        p = canvas.screen_to_canvas(Point(420, 270), origin=Point(20, 20))

        assert p == Point(150, 100)

    def test_round_trip(self):
        canvas = CanvasState(offset=Point(-30, 15), zoom=0.5)
        origin = Point(200, 64)

        p = canvas.canvas_to_screen(canvas.screen_to_canvas(Point(500, 300), origin), origin)

        assert p.x == pytest.approx(500)
        assert p.y == pytest.approx(300)

    def test_drop_position_centers_node(self):
        """The dropped node is centered on the pointer."""
        canvas = CanvasState()

        pos = canvas.drop_position(Point(400, 300))

        assert pos == NodePosition(x=272, y=260)


class TestInteractions:
    """Tests for panning and dragging."""

    def test_pan_follows_pointer(self):
        canvas = CanvasState(offset=Point(10, 10))

        canvas.begin_pan(Point(100, 100))
        offset = canvas.pan_to(Point(150, 80))

        assert offset == Point(60, -10)

    def test_drag_keeps_grab_offset(self):
        canvas = CanvasState()

        canvas.begin_drag("node-1", NodePosition(x=100, y=100), Point(130, 120))
        pos = canvas.drag_to(Point(230, 220))

        assert pos == NodePosition(x=200, y=200)

    def test_drag_without_node(self):
        assert CanvasState().drag_to(Point(1, 1)) is None

    def test_end_interaction(self):
        canvas = CanvasState()
        canvas.begin_pan(Point(0, 0))
        canvas.begin_drag("node-1", NodePosition(x=0, y=0), Point(0, 0))

        canvas.end_interaction()

        assert canvas.pan_start is None
        assert canvas.dragged_node_id is None


class TestConnectionPath:
    """Tests for connection curves."""

    def test_ports(self):
        pos = NodePosition(x=100, y=200)

        assert output_port(pos) == Point(356, 240)
        assert input_port(pos) == Point(100, 240)

    def test_path_with_capped_control_offset(self):
        path = connection_path(NodePosition(x=100, y=200), NodePosition(x=800, y=300))

        assert path == "M 356 240 C 456 240, 700 340, 800 340"

    def test_path_with_short_gap(self):
        """Control offset is half the horizontal distance when under the cap."""
        path = connection_path(NodePosition(x=0, y=0), NodePosition(x=356, y=0))

        assert path == "M 256 40 C 306 40, 306 40, 356 40"
