import math

import pytest

from raycube.raycast import (
    Quadrant,
    RayHit,
    cast_ray,
    normalize_angle,
    projected_height,
    quadrant,
    wall_texture_index,
)

BOX = ["11111", "10001", "10N01", "10001", "11111"]
BOX_X = 150.0
BOX_Y = 150.0

DOOR_GRID = ["1111111", "1N0P001", "1111111"]


def cast_in_box(angle):
    return cast_ray(BOX, 5, 4, BOX_X, BOX_Y, angle, False)


def test_normalize_angle_wraps_once():
    assert normalize_angle(-0.5) == pytest.approx(2 * math.pi - 0.5)
    assert normalize_angle(2 * math.pi + 0.5) == pytest.approx(0.5)
    assert normalize_angle(1.25) == 1.25


@pytest.mark.parametrize(
    "angle, expected",
    [
        (math.pi / 4, Quadrant.DOWN_RIGHT),
        (3 * math.pi / 4, Quadrant.DOWN_LEFT),
        (5 * math.pi / 4, Quadrant.UP_LEFT),
        (7 * math.pi / 4, Quadrant.UP_RIGHT),
        (3 * math.pi / 2, Quadrant.UP_RIGHT),
        (0.0, Quadrant.DOWN_RIGHT),
        (2 * math.pi, Quadrant.DOWN_RIGHT),
    ],
)
def test_quadrant(angle, expected):
    assert quadrant(angle) is expected


def test_quadrant_rejects_out_of_range():
    with pytest.raises(ValueError):
        quadrant(7.0)


def test_quadrant_faces():
    up_left = quadrant(5 * math.pi / 4)
    down_right = quadrant(math.pi / 4)
    assert up_left.faces_up and up_left.faces_left
    assert not down_right.faces_up and not down_right.faces_left


def test_east_ray_hits_wall_vertically():
    hit = cast_in_box(0.0)
    assert hit.vertical
    assert hit.distance == pytest.approx(90)
    assert hit.door_texture is None


def test_axis_rays_are_symmetric_in_box():
    distances = [cast_in_box(a).distance for a in (0.0, math.pi / 2, math.pi, 3 * math.pi / 2)]
    for distance in distances[1:]:
        assert distance == pytest.approx(distances[0])


@pytest.mark.parametrize(
    "angle", [0.0, 0.3, 1.0, math.pi / 2, 2.0, 2.5, math.pi, 3.5, 4.2, 3 * math.pi / 2, 5.0, 5.9]
)
def test_hit_lands_on_wall_cell(angle):
    hit = cast_in_box(angle)
    assert BOX[int(hit.y / 60)][int(hit.x / 60)] == "1"
    assert hit.distance == pytest.approx(math.hypot(hit.x - BOX_X, hit.y - BOX_Y))


def test_negative_angle_is_normalized():
    assert cast_in_box(-0.3).distance == pytest.approx(cast_in_box(2 * math.pi - 0.3).distance)


def test_closed_door_texture():
    hit = cast_ray(DOOR_GRID, 7, 2, 90.0, 90.0, 0.0, False)
    assert hit.vertical
    assert hit.door_texture == 4
    assert wall_texture_index(hit) == 4


def test_open_door_texture():
    hit = cast_ray(DOOR_GRID, 7, 2, 90.0, 90.0, 0.0, True)
    assert hit.door_texture == 5
    assert wall_texture_index(hit) == 5


def test_wall_without_door_has_no_door_texture():
    hit = cast_ray(DOOR_GRID, 7, 2, 90.0, 90.0, math.pi, True)
    assert hit.door_texture is None
    assert DOOR_GRID[int(hit.y / 60)][int(hit.x / 60)] == "1"


@pytest.mark.parametrize(
    "vertical, quad, expected",
    [
        (False, Quadrant.UP_RIGHT, 1),
        (False, Quadrant.UP_LEFT, 1),
        (False, Quadrant.DOWN_LEFT, 0),
        (False, Quadrant.DOWN_RIGHT, 0),
        (True, Quadrant.UP_RIGHT, 3),
        (True, Quadrant.DOWN_RIGHT, 3),
        (True, Quadrant.UP_LEFT, 2),
        (True, Quadrant.DOWN_LEFT, 2),
    ],
)
def test_wall_texture_index_by_face(vertical, quad, expected):
    hit = RayHit(x=10.0, y=20.0, distance=5.0, vertical=vertical, quadrant=quad)
    assert wall_texture_index(hit) == expected


def test_texture_offset_follows_face():
    horizontal = RayHit(x=10.0, y=20.0, distance=5.0, vertical=False, quadrant=Quadrant.UP_LEFT)
    vertical = RayHit(x=10.0, y=20.0, distance=5.0, vertical=True, quadrant=Quadrant.UP_LEFT)
    assert horizontal.texture_offset == 10.0
    assert vertical.texture_offset == 20.0


def test_projected_height_is_inverse_to_distance():
    near = projected_height(50.0, 0.0)
    far = projected_height(100.0, 0.0)
    assert near == pytest.approx(2 * far)


def test_projected_height_corrects_fisheye():
    offset = 0.4
    assert projected_height(80.0, offset) == pytest.approx(
        projected_height(80.0 * math.cos(offset), 0.0)
    )


def test_projected_height_at_zero_distance_is_infinite():
    assert projected_height(0.0, 0.0) == math.inf