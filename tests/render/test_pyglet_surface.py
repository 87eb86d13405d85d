from __future__ import annotations

from types import SimpleNamespace

import pytest

pyglet_surface = pytest.importorskip("engine.render.pyglet_surface")


class _FakeShape:
    created: list["_FakeShape"] = []

    def __init__(self, *args, batch=None, group=None, **kwargs) -> None:  # noqa: ANN001
        self.args = args
        self.kwargs = kwargs
        self.group = group
        self.visible = True
        self.color = kwargs.get("color")
        _FakeShape.created.append(self)


class _FakeLine(_FakeShape):
    def __init__(self, x, y, x2, y2, *, thickness, color, batch=None, group=None) -> None:  # noqa: ANN001
        super().__init__(batch=batch, group=group, color=color)
        self.x, self.y, self.x2, self.y2 = x, y, x2, y2
        self.thickness = thickness


class _FakeCircle(_FakeShape):
    def __init__(self, x, y, radius, *, segments, color, batch=None, group=None) -> None:  # noqa: ANN001
        super().__init__(batch=batch, group=group, color=color)
        self.x, self.y, self.radius = x, y, radius
        self.segments = segments


class _FakeGroup:
    def __init__(self, order: int = 0) -> None:
        self.order = order


class _FakeBatch:
    def __init__(self) -> None:
        self.draws = 0

    def draw(self) -> None:
        self.draws += 1


class _Window:
    width, height = 200, 100

    def __init__(self) -> None:
        self.bg = None

    def set_background_color(self, rgba) -> None:  # noqa: ANN001
        self.bg = rgba


@pytest.fixture()
def fake_pyglet(monkeypatch: pytest.MonkeyPatch) -> None:
    _FakeShape.created = []
    fake = SimpleNamespace(
        graphics=SimpleNamespace(Batch=_FakeBatch, Group=_FakeGroup),
        shapes=SimpleNamespace(Line=_FakeLine, Circle=_FakeCircle),
    )
    monkeypatch.setattr(pyglet_surface, "pyglet", fake)


def _frame(surface, lines: int, circles: int, shift: float = 0.0) -> None:  # noqa: ANN001
    surface.begin_frame()
    surface.clear((1.0, 1.0, 1.0, 1.0))
    for i in range(lines):
        surface.line(i + shift, 10.0, i + shift, 20.0, 1.0, (0.0, 0.0, 1.0, 0.5))
    for i in range(circles):
        surface.circle(i + shift, 30.0, 2.0 + i, (1.0, 0.0, 0.0, 1.0))
    surface.end_frame()


def test_shapes_are_reused_across_frames(fake_pyglet) -> None:  # noqa: ANN001
    window = _Window()
    surface = pyglet_surface.PygletSurface(window)
    _frame(surface, lines=5, circles=4)
    assert len(_FakeShape.created) == 9
    first = list(_FakeShape.created)

    _frame(surface, lines=5, circles=4, shift=1.0)
    assert _FakeShape.created == first
    assert surface.slot_count == 9
    assert surface.shape_count == 9
    assert window.bg == (1.0, 1.0, 1.0, 1.0)


def test_unused_slots_are_hidden_then_revived(fake_pyglet) -> None:  # noqa: ANN001
    surface = pyglet_surface.PygletSurface(_Window())
    _frame(surface, lines=4, circles=3)
    _frame(surface, lines=1, circles=1)
    lines = [s for s in _FakeShape.created if isinstance(s, _FakeLine)]
    circles = [s for s in _FakeShape.created if isinstance(s, _FakeCircle)]
    assert [s.visible for s in lines] == [True, False, False, False]
    assert [s.visible for s in circles] == [True, False, False]
    assert surface.shape_count == 2

    _frame(surface, lines=3, circles=3)
    assert [s.visible for s in lines] == [True, True, True, False]
    assert all(s.visible for s in circles)
    assert surface.slot_count == 7


def test_y_is_flipped_and_layers_are_ordered(fake_pyglet) -> None:  # noqa: ANN001
    surface = pyglet_surface.PygletSurface(_Window())
    _frame(surface, lines=1, circles=1)
    line, circle = _FakeShape.created
    assert (line.y, line.y2) == (90.0, 80.0)
    assert circle.y == 70.0
    assert line.color == (0, 0, 255, 128)
    assert line.group.order < circle.group.order
    assert circle.segments == pyglet_surface.DEFAULT_CIRCLE_SEGMENTS

    _frame(surface, lines=1, circles=1, shift=5.0)
    assert line.x == 5.0 and circle.x == 5.0
    assert circle.radius == 2.0
