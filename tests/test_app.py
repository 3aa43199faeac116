import math

import pytest

from raycube.app import (
    FRAMES_PER_IMAGE,
    IMAGES_PER_WEAPON,
    Game,
    WeaponAnimation,
    main,
    read_weapon_list,
)
from raycube.constants import HEIGHT, SPEED, WEAPONS, WIDTH, Key
from raycube.scene import Scene
from raycube.texture import TRANSPARENT, Texture

GRID = [
    "111111",
    "100001",
    "10N001",
    "100001",
    "111111",
]


def _scene():
    return Scene(
        textures={"NO": "a", "SO": "b", "WE": "c", "EA": "d"},
        ceiling=(10, 20, 30),
        floor=(40, 50, 60),
        grid=list(GRID),
        width=6,
        last_line=4,
        spawn=(2, 2),
        spawn_char="N",
    )


def _textures():
    return [Texture.solid(4, 4, 0x00AA00 + i) for i in range(6)]


def _weapons(color):
    return [[Texture.solid(4, 4, color) for _ in range(4)] for _ in range(WEAPONS)]


def _game(color=0x123456):
    return Game(_scene(), _textures(), _weapons(color))


def test_animation_idle_shows_first_image():
    animation = WeaponAnimation()
    assert [animation.advance() for _ in range(5)] == [0] * 5
    assert animation.firing is False


def test_animation_firing_sequence():
    animation = WeaponAnimation(firing=True)
    frames = [animation.advance() for _ in range(FRAMES_PER_IMAGE * IMAGES_PER_WEAPON)]
    for index in range(IMAGES_PER_WEAPON):
        assert frames.count(index) == FRAMES_PER_IMAGE
    assert frames == sorted(frames)
    assert animation.advance() == 0
    assert animation.firing is False


def test_too_few_textures_rejected():
    with pytest.raises(ValueError):
        Game(_scene(), _textures()[:4], _weapons(1))


def test_player_starts_at_spawn():
    game = _game()
    assert (game.player.x, game.player.y) == _scene().player_position
    assert game.player.angle == pytest.approx(3 * math.pi / 2)


def test_space_starts_and_cycles_weapons():
    game = _game()
    assert game.started is False
    seen = []
    for _ in range(WEAPONS + 1):
        game.handle_key(Key.SWITCH_WEAPON)
        seen.append(game.weapon)
    assert game.started is True
    assert seen == list(range(WEAPONS)) + [0]


def test_turning_keys_rotate():
    game = _game()
    start = game.player.angle
    game.handle_key(Key.TURN_RIGHT)
    game.handle_key(Key.TURN_RIGHT)
    game.handle_key(Key.TURN_LEFT)
    assert game.player.angle == pytest.approx(start + 0.1)


def test_forward_moves_towards_north():
    game = _game()
    x, y = game.player.x, game.player.y
    game.handle_key(Key.FORWARD)
    assert game.player.x == pytest.approx(x)
    assert game.player.y == pytest.approx(y - SPEED)


def test_door_key_needs_third_weapon():
    game = _game()
    game.handle_key(Key.SWITCH_WEAPON)
    game.handle_key(Key.DOOR)
    assert game.door_open is False
    game.weapon = 2
    game.handle_key(Key.DOOR)
    assert game.door_open is True
    assert game.weapon == 1


def test_fire_and_escape():
    game = _game()
    game.handle_key(Key.FIRE)
    assert game.animation.firing is True
    game.handle_key(Key.ESCAPE)
    assert game.running is False


def test_mouse_turns_towards_motion():
    game = _game()
    start = game.player.angle
    game.handle_mouse(50)
    assert game.player.angle > start
    game.handle_mouse(50)
    game.handle_mouse(10)
    assert game.player.angle == pytest.approx(start)


def test_render_draws_weapon():
    game = _game(0x123456)
    game.handle_key(Key.SWITCH_WEAPON)
    frame = game.render()
    left = WIDTH // 2 - 2 + 100
    top = HEIGHT - 4 + 2 - 60
    assert frame.get(left + 1, top) == 0x123456
    assert frame.get(left + 3, top + 3) == 0x123456


def test_transparent_weapon_leaves_frame_unchanged():
    plain = _game(TRANSPARENT)
    armed = _game(TRANSPARENT)
    armed.handle_key(Key.SWITCH_WEAPON)
    assert armed.render().pixels == plain.render().pixels


def test_read_weapon_list(tmp_path):
    listing = tmp_path / "images.txt"
    names = [f"w{i}.xpm" for i in range(WEAPONS * IMAGES_PER_WEAPON)]
    listing.write_text("\n".join(names) + "\n")
    groups = read_weapon_list(listing)
    assert len(groups) == WEAPONS
    assert [name for group in groups for name in group] == names


def test_read_weapon_list_too_short(tmp_path):
    listing = tmp_path / "images.txt"
    listing.write_text("one.xpm\n")
    with pytest.raises(ValueError):
        read_weapon_list(listing)


def test_main_requires_one_argument(capsys):
    assert main([]) == 1
    assert "arguments error" in capsys.readouterr().err


def test_main_missing_file(tmp_path, capsys):
    missing = tmp_path / "none.cub"
    assert main([str(missing)]) == 2
    assert "file invalide" in capsys.readouterr().out


def test_main_reports_map_error(tmp_path, capsys):
    path = tmp_path / "map.cub"
    path.write_text("\n".join(GRID) + "\n")
    assert main([str(path)]) == 1
    assert "path_error" in capsys.readouterr().err