import dataclasses
import json

import matplotlib.colors as mcolors
import pytest

from maze_sim import CellState, MazeConfig, utils


def test_defaults_match_example_build():
    config = MazeConfig()
    assert (config.height, config.width) == (37, 49)
    assert config.start == "origin"
    assert config.straight_bias == pytest.approx(0.8)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"height": -1},
        {"width": -3},
        {"start": "middle"},
        {"straight_bias": 1.5},
        {"straight_bias": -0.1},
    ],
)
def test_invalid_config_rejected(kwargs):
    with pytest.raises(ValueError):
        MazeConfig(**kwargs)


def test_from_dict_flat_and_nested():
    flat = MazeConfig.from_dict({"height": 5, "width": 7, "seed": 3})
    nested = MazeConfig.from_dict({"maze": {"height": 5, "width": 7, "seed": 3}})
    assert flat == nested
    assert flat.width == 7


def test_from_dict_rejects_unknown_keys():
    with pytest.raises(ValueError, match="colour"):
        MazeConfig.from_dict({"height": 5, "colour": "red"})


def test_load_params_json(tmp_path):
    path = tmp_path / "maze.json"
    path.write_text(json.dumps({"height": 29, "width": 39, "start": "entrance"}))
    config = MazeConfig.from_dict(utils.load_params(path))
    assert (config.height, config.width, config.start) == (29, 39, "entrance")


def test_load_params_toml(tmp_path):
    if utils.tomllib is None:
        pytest.skip("tomllib unavailable")
    path = tmp_path / "maze.toml"
    path.write_text('[maze]\nheight = 5\nwidth = 5\nstraight_bias = 0.5\n')
    config = MazeConfig.from_dict(utils.load_params(path))
    assert config.straight_bias == 0.5


def test_load_params_unsupported_suffix(tmp_path):
    path = tmp_path / "maze.yaml"
    path.write_text("height: 5\n")
    with pytest.raises(ValueError):
        utils.load_params(path)


def test_make_rng_is_seeded():
    assert utils.make_rng(5).random() == utils.make_rng(5).random()


def test_config_is_frozen():
    config = MazeConfig(height=5, width=5)
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.straight_bias = 0.1
    assert dataclasses.replace(config, verbose=True).verbose is True


def test_state_colors_cover_every_state():
    assert len(utils.STATE_COLORS) == len(CellState)
    assert all(mcolors.is_color_like(c) for c in utils.STATE_COLORS)
