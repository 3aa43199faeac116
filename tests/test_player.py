import math

import pytest

from raycube.constants import SPEED, TILE_SIZE, Key
from raycube.player import Player, key_vector, toggle_door

ROOM = ["11111", "10001", "10001", "10001", "11111"]
DOORS = ["11111", "10P01", "11111"]
DEAD_END = ["1111", "10P1", "1111"]


def test_rotate_wraps_below_zero():
    player = Player(0.0, 0.0, 0.05)
    player.rotate(-0.1)
    assert 0 <= player.angle <= 2 * math.pi
    assert math.isclose(math.cos(player.angle), math.cos(-0.05))
    assert math.isclose(math.sin(player.angle), math.sin(-0.05))


def test_rotate_wraps_above_full_turn():
    player = Player(0.0, 0.0, 2 * math.pi - 0.05)
    player.rotate(0.1)
    assert 0 <= player.angle <= 2 * math.pi
    assert math.isclose(math.sin(player.angle), math.sin(0.05), abs_tol=1e-12)


def test_step_in_open_room_moves():
    player = Player(150.0, 150.0, 0.0)
    player.step(ROOM, 5.0, -5.0)
    assert player.x == 155.0
    assert player.y == 145.0


def test_step_into_wall_blocked_on_x():
    player = Player(90.0, 90.0, 0.0)
    player.step(ROOM, -40.0, 0.0)
    assert player.x == 90.0
    assert player.y == 90.0


def test_step_into_wall_blocked_on_y():
    player = Player(90.0, 90.0, 0.0)
    player.step(ROOM, 0.0, -40.0)
    assert player.y == 90.0


def test_step_slides_along_wall():
    player = Player(90.0, 150.0, 0.0)
    player.step(ROOM, -40.0, 5.0)
    assert player.x == 90.0
    assert player.y == 155.0


def test_closed_door_blocks():
    player = Player(90.0, 90.0, 0.0)
    player.step_with_doors(DOORS, 35.0, 0.0, False)
    assert player.x == 90.0
    assert player.y == 90.0


def test_open_door_carries_player_through():
    player = Player(90.0, 90.0, 0.0)
    player.step_with_doors(DOORS, 35.0, 0.0, True)
    assert int(player.x // TILE_SIZE) == 3
    assert DOORS[int(player.y // TILE_SIZE)][int(player.x // TILE_SIZE)] == "0"


def test_open_door_before_wall_sends_player_back():
    player = Player(90.0, 90.0, 0.0)
    player.step_with_doors(DEAD_END, 35.0, 0.0, True)
    assert player.x == pytest.approx(90.0)
    assert player.y == pytest.approx(90.0)


def test_step_with_doors_matches_step_without_doors():
    plain = Player(150.0, 150.0, 0.0)
    with_doors = Player(150.0, 150.0, 0.0)
    plain.step(ROOM, -70.0, 3.0)
    with_doors.step_with_doors(ROOM, -70.0, 3.0, False)
    assert (plain.x, plain.y) == (with_doors.x, with_doors.y)


def test_key_vector_forward_and_backward():
    forward = key_vector(Key.FORWARD, 0.0)
    backward = key_vector(Key.BACKWARD, 0.0)
    assert forward == pytest.approx((SPEED, 0.0))
    assert backward == pytest.approx((-forward[0], -forward[1]))


def test_key_vector_strafe():
    right = key_vector(Key.STRAFE_RIGHT, 0.0)
    left = key_vector(Key.STRAFE_LEFT, 0.0)
    assert right == pytest.approx((0.0, SPEED), abs=1e-9)
    assert left == pytest.approx((-right[0], -right[1]), abs=1e-9)


def test_key_vector_other_key():
    assert key_vector(Key.ESCAPE, 1.0) is None


@pytest.mark.parametrize("state", [False, True])
def test_toggle_door_away_from_door_flips(state):
    assert toggle_door(state, DOORS, 90.0, 90.0) is (not state)


def test_toggle_door_inside_open_doorway_stays_open():
    assert toggle_door(True, DOORS, 150.0, 90.0) is True


def test_toggle_door_inside_closed_doorway_opens():
    assert toggle_door(False, DOORS, 150.0, 90.0) is True