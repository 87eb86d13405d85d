from __future__ import annotations

import math

import numpy as np
import pytest

from engine.core.projection import (
    Facing,
    ProjectionParams,
    depth_order,
    facing_mask,
    perspective_scale,
    project,
    rotate_x,
    rotate_y,
)


def test_rotate_y_quarter_turn() -> None:
    out = rotate_y(np.array([[1.0, 2.0, 0.0]]), math.pi / 2)
    np.testing.assert_allclose(out, [[0.0, 2.0, -1.0]], atol=1e-12)


def test_rotate_x_quarter_turn() -> None:
    out = rotate_x(np.array([[3.0, 1.0, 0.0]]), math.pi / 2)
    np.testing.assert_allclose(out, [[3.0, 0.0, 1.0]], atol=1e-12)


def test_rotation_preserves_length_and_input() -> None:
    pts = np.array([[1.0, 2.0, 3.0], [-4.0, 0.5, 2.0]])
    before = pts.copy()
    out = rotate_x(rotate_y(pts, 0.7), 0.3)
    np.testing.assert_allclose(np.linalg.norm(out, axis=1), np.linalg.norm(pts, axis=1))
    np.testing.assert_array_equal(pts, before)


def test_rotation_rejects_bad_shape() -> None:
    with pytest.raises(ValueError):
        rotate_y(np.zeros((3, 2)), 0.1)


def test_project_at_zero_depth_is_offset_only() -> None:
    xy, depth = project(np.array([[100.0, 50.0, 0.0]]), ProjectionParams(800.0, (10.0, 20.0)))
    np.testing.assert_allclose(xy, [[110.0, 70.0]])
    np.testing.assert_allclose(depth, [0.0])


def test_project_scales_with_depth() -> None:
    pts = np.array([[100.0, -40.0, 800.0], [100.0, -40.0, -400.0]])
    xy, depth = project(pts, ProjectionParams(800.0, (0.0, 0.0)))
    # 奥: 800/(1600)=0.5, 手前: 800/400=2
    np.testing.assert_allclose(xy, [[50.0, -20.0], [200.0, -80.0]])
    np.testing.assert_allclose(depth, [800.0, -400.0])


def test_point_behind_camera_collapses_to_center() -> None:
    scale = perspective_scale(np.array([-800.0, -1000.0]), 800.0)
    np.testing.assert_array_equal(scale, [0.0, 0.0])
    xy, _ = project(np.array([[5.0, 5.0, -900.0]]), ProjectionParams(800.0, (7.0, 9.0)))
    np.testing.assert_allclose(xy, [[7.0, 9.0]])


def test_projection_params_validation() -> None:
    with pytest.raises(ValueError):
        ProjectionParams(focal_length=0.0)


def test_facing_conventions() -> None:
    depth = np.array([-1.0, 0.0, 1.0])
    np.testing.assert_array_equal(facing_mask(depth), [True, False, False])
    np.testing.assert_array_equal(
        facing_mask(depth, Facing.POSITIVE_DEPTH), [False, False, True]
    )


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("negative", Facing.NEGATIVE_DEPTH),
        ("POSITIVE_DEPTH", Facing.POSITIVE_DEPTH),
        (Facing.POSITIVE_DEPTH, Facing.POSITIVE_DEPTH),
    ],
)
def test_facing_parse(raw, expected) -> None:
    assert Facing.parse(raw) is expected


def test_facing_parse_rejects_unknown() -> None:
    with pytest.raises(ValueError):
        Facing.parse("sideways")


def test_depth_order_is_ascending_and_stable() -> None:
    depth = np.array([0.5, -1.0, 0.5, -1.0, 2.0])
    order = depth_order(depth)
    np.testing.assert_array_equal(order, [1, 3, 0, 2, 4])
    assert np.all(np.diff(depth[order]) >= 0)


def test_depth_order_empty() -> None:
    assert depth_order(np.empty(0)).shape == (0,)
