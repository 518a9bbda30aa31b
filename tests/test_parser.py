import pytest

from raycub.config import Config
from raycub.errors import ConfigError
from raycub.parser import (
    LineKind,
    check_argument,
    classify_line,
    parse,
    parse_color,
    parse_file,
    parse_line,
    parse_lines,
    parse_map_line,
    parse_texture,
)

MAP_ROWS = ["111111", "100001", "10N001", "100001", "111111"]
LEAKY_ROWS = ["111111", "100001", "10N001", "100000", "111111"]


@pytest.fixture
def textures(tmp_path):
    paths = {}
    for name in ("north", "south", "west", "east"):
        path = tmp_path / f"{name}.png"
        path.write_bytes(b"")
        paths[name] = str(path)
    return paths


def _scene(textures, rows=MAP_ROWS):
    return [
        f"NO {textures['north']}\n",
        f"SO {textures['south']}\n",
        f"WE {textures['west']}\n",
        f"EA {textures['east']}\n",
        "\n",
        "F 220,100,0\n",
        "C 225,30,0\n",
        "\n",
        *(row + "\n" for row in rows),
    ]


def _write_scene(tmp_path, textures, rows=MAP_ROWS):
    path = tmp_path / "scene.cub"
    path.write_text("".join(_scene(textures, rows)))
    return str(path)


def test_check_argument_requires_one_path():
    with pytest.raises(ConfigError, match="Usage"):
        check_argument(["raycub"])
    with pytest.raises(ConfigError, match="Usage"):
        check_argument(["raycub", "a.cub", "b.cub"])


def test_check_argument_rejects_directory(tmp_path):
    with pytest.raises(ConfigError, match="Cannot use directory"):
        check_argument(["raycub", str(tmp_path)])


def test_check_argument_rejects_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="Cannot access file"):
        check_argument(["raycub", str(tmp_path / "missing.cub")])


def test_check_argument_rejects_wrong_extension(tmp_path):
    path = tmp_path / "scene.txt"
    path.write_text("")
    with pytest.raises(ConfigError, match="Invalid file extension"):
        check_argument(["raycub", str(path)])


def test_check_argument_rejects_bare_extension(tmp_path, monkeypatch):
    (tmp_path / ".cub").write_text("")
    monkeypatch.chdir(tmp_path)
    with pytest.raises(ConfigError, match="Invalid file extension"):
        check_argument(["raycub", ".cub"])


def test_check_argument_returns_path(tmp_path):
    path = tmp_path / "scene.cub"
    path.write_text("")
    assert check_argument(["raycub", str(path)]) == str(path)


@pytest.mark.parametrize(
    ("line", "kind"),
    [
        ("NO ./north.png\n", LineKind.TEXTURE),
        ("   SO ./south.png", LineKind.TEXTURE),
        ("WE x", LineKind.TEXTURE),
        ("EA x", LineKind.TEXTURE),
        ("F 1,2,3", LineKind.COLOR),
        ("\tC 1,2,3", LineKind.COLOR),
        ("  1111", LineKind.MAP),
        ("N01", LineKind.MAP),
        ("NO", LineKind.MAP),
        ("F1,2,3", LineKind.INVALID),
        ("X something", LineKind.INVALID),
    ],
)
def test_classify_line(line, kind):
    assert classify_line(line) is kind


def test_parse_texture_records_path(textures):
    config = Config()
    assert parse_texture(config, f"NO {textures['north']}") == textures["north"]
    assert config.north == textures["north"]
    parse_texture(config, f"EA   {textures['east']}  ")
    assert config.east == textures["east"]


def test_parse_texture_rejects_redefinition(textures):
    config = Config()
    parse_texture(config, f"SO {textures['south']}")
    with pytest.raises(ConfigError, match="Texture already defined"):
        parse_texture(config, f"SO {textures['north']}")
    assert config.south == textures["south"]


def test_parse_texture_checks_path(tmp_path):
    config = Config()
    with pytest.raises(ConfigError, match="too short"):
        parse_texture(config, "NO a.pn")
    with pytest.raises(ConfigError, match="not .png"):
        parse_texture(config, "NO north.jpg")
    with pytest.raises(ConfigError, match="file not found"):
        parse_texture(config, f"NO {tmp_path / 'absent.png'}")
    assert config.north is None


def test_parse_texture_rejects_unknown_identifier():
    with pytest.raises(ConfigError, match="Invalid texture identifier"):
        parse_texture(Config(), "XX north.png")


def test_parse_color_sets_floor_and_ceiling():
    config = Config()
    parse_color(config, "F 220,100,0")
    parse_color(config, "C 0, 7 ,255")
    assert (config.floor.r, config.floor.g, config.floor.b) == (220, 100, 0)
    assert (config.ceiling.r, config.ceiling.g, config.ceiling.b) == (0, 7, 255)


def test_parse_color_collapses_repeated_commas():
    config = Config()
    parse_color(config, "F 1,,2,3")
    assert (config.floor.r, config.floor.g, config.floor.b) == (1, 2, 3)


def test_parse_color_rejects_redefinition():
    config = Config()
    parse_color(config, "C 1,2,3")
    with pytest.raises(ConfigError, match="Color already defined"):
        parse_color(config, "C 4,5,6")


@pytest.mark.parametrize(
    ("line", "message"),
    [
        ("F ,1,2", "Invalid comma placement"),
        ("F 1,2,", "Invalid comma placement"),
        ("F 1,2", "Invalid component count"),
        ("F 1,2,3,4", "Invalid component count"),
        ("F 1,2,256", "Invalid color value"),
        ("F 1,a,3", "Invalid color value"),
        ("F 1,-2,3", "Invalid color value"),
        ("X 1,2,3", "Invalid color type"),
    ],
)
def test_parse_color_errors(line, message):
    config = Config()
    with pytest.raises(ConfigError, match=message):
        parse_color(config, line)
    assert not config.floor.is_set()


def test_parse_map_line_appends_and_tracks_spawn():
    config = Config()
    parse_map_line(config, "1111")
    parse_map_line(config, "10W1\n")
    game_map = config.game_map
    assert game_map.grid == ["1111", "10W1"]
    assert game_map.spawn == "W"
    assert game_map.player_x == "10W1".index("W")
    assert game_map.player_y == game_map.height


def test_parse_map_line_rejects_bad_rows():
    config = Config()
    with pytest.raises(ConfigError, match="Empty map line"):
        parse_map_line(config, "\n")
    with pytest.raises(ConfigError, match="Invalid map character"):
        parse_map_line(config, "1021")
    assert config.game_map.grid == []


def test_parse_map_line_rejects_second_spawn():
    config = Config()
    parse_map_line(config, "1N1")
    with pytest.raises(ConfigError, match="Multiple player start positions"):
        parse_map_line(config, "1S1")


def test_parse_line_skips_blank_lines():
    config = Config()
    assert parse_line(config, "  \t\n") is None
    assert config == Config()


def test_parse_line_marks_map_start():
    config = Config()
    assert parse_line(config, "  111\n") is LineKind.MAP
    assert config.map_started
    assert config.game_map.grid == ["  111"]


def test_parse_line_rejects_content_after_map(textures):
    config = Config()
    parse_line(config, "111\n")
    with pytest.raises(ConfigError, match="Non-map content after map started"):
        parse_line(config, f"NO {textures['north']}\n")


def test_parse_line_rejects_unknown_line():
    with pytest.raises(ConfigError, match="Invalid line in map.cub"):
        parse_line(Config(), "hello\n")


def test_parse_lines_builds_config(textures):
    config = parse_lines(_scene(textures))
    assert config.north == textures["north"]
    assert config.west == textures["west"]
    assert (config.ceiling.r, config.ceiling.g, config.ceiling.b) == (225, 30, 0)
    assert config.game_map.grid == MAP_ROWS
    assert config.game_map.spawn == "N"


def test_parse_lines_skips_blank_lines_inside_map(textures):
    lines = _scene(textures, rows=MAP_ROWS[:2]) + ["\n"] + [row + "\n" for row in MAP_ROWS[2:]]
    assert parse_lines(lines).game_map.grid == MAP_ROWS


def test_parse_file_reads_scene(tmp_path, textures):
    config = parse_file(_write_scene(tmp_path, textures))
    assert config.game_map.grid == MAP_ROWS
    assert config.south == textures["south"]


def test_parse_file_missing(tmp_path):
    with pytest.raises(ConfigError, match="Failed to open file"):
        parse_file(tmp_path / "absent.cub")


def test_parse_validates_and_prints(tmp_path, textures, capsys):
    path = _write_scene(tmp_path, textures)
    config = parse(["raycub", path])
    assert config.game_map.grid == MAP_ROWS
    assert "=== CONFIG CONTENT ===" in capsys.readouterr().out


def test_parse_rejects_open_map(tmp_path, textures):
    path = _write_scene(tmp_path, textures, rows=LEAKY_ROWS)
    with pytest.raises(ConfigError, match="Map not enclosed"):
        parse(["raycub", path])