import pytest

from delve.topology import ConfigurationError, GenerationConfig, GridBounds, generate
from delve.topology.bounds import MAX_DUNGEON_HEIGHT, MAX_DUNGEON_WIDTH


def test_defaults_match_escape_path_length():
    b = GridBounds(20, 20)
    assert b.min_path_length == 15
    assert b.max_manhattan_path == 38
    assert b.area == 400


def test_min_path_equal_to_manhattan_maximum_is_accepted():
    b = GridBounds(10, 10, 18)
    assert b.min_path_length == b.max_manhattan_path


def test_min_path_one_past_manhattan_maximum_is_rejected():
    with pytest.raises(ConfigurationError) as exc:
        GridBounds(10, 10, 19)
    assert "unsatisfiable" in str(exc.value)


@pytest.mark.parametrize(
    "width,height,min_path",
    [
        (0, 10, 1),
        (10, 0, 1),
        (-3, 10, 1),
        (MAX_DUNGEON_WIDTH + 1, 10, 5),
        (10, MAX_DUNGEON_HEIGHT + 1, 5),
        (10, 10, 0),
        (10, 10, -1),
        (1, 1, 1),
    ],
)
def test_invalid_bounds_raise_configuration_error(width, height, min_path):
    with pytest.raises(ConfigurationError):
        GridBounds(width, height, min_path)


@pytest.mark.parametrize("bad", [True, 10.0, "10", None])
def test_non_integer_dimensions_rejected(bad):
    with pytest.raises(ConfigurationError):
        GridBounds(bad, 10, 5)


def test_configuration_error_is_a_value_error():
    # Callers that only know about ValueError still catch bad input
    with pytest.raises(ValueError):
        GridBounds(0, 0)


def test_custom_maximums():
    assert GridBounds(150, 150, 20, max_width=200, max_height=200).width == 150
    with pytest.raises(ConfigurationError):
        GridBounds(30, 10, 5, max_width=25)


def test_border_cells_and_corners():
    b = GridBounds(4, 3, 2)
    border = b.border_cells()
    assert len(border) == len(set(border)) == 10
    assert set(b.corners()) <= set(border)
    assert all(b.contains(c) for c in border)
    assert b.farthest_corner_distance(b.corners()[0]) == b.max_manhattan_path


def test_generation_config_defaults():
    c = GenerationConfig()
    assert c.branch_probability == 0.3
    assert c.loop_probability == 0.1
    assert c.max_attempts == 10
    assert c.max_branch_rooms is None
    assert c.enable_metrics is True


@pytest.mark.parametrize(
    "kwargs",
    [
        {"branch_probability": 1.5},
        {"branch_probability": -0.1},
        {"loop_probability": 2},
        {"loop_probability": True},
        {"max_attempts": 0},
        {"max_branch_depth": -1},
        {"path_slack": "3"},
        {"max_branch_rooms": -2},
    ],
)
def test_generation_config_rejects_out_of_range(kwargs):
    with pytest.raises(ConfigurationError):
        GenerationConfig(**kwargs)


def test_generation_config_from_env():
    env = {
        "DELVE_BRANCH_PROBABILITY": "0.5",
        "DELVE_LOOP_PROBABILITY": "0",
        "DELVE_MAX_ATTEMPTS": "3",
        "DELVE_MAX_BRANCH_ROOMS": "",
        "DELVE_ENABLE_GENERATION_METRICS": "off",
    }
    c = GenerationConfig.from_env(env)
    assert c.branch_probability == 0.5
    assert c.loop_probability == 0.0
    assert c.max_attempts == 3
    assert c.max_branch_rooms is None
    assert c.enable_metrics is False


def test_generation_config_overrides_win_and_none_is_ignored():
    c = GenerationConfig.from_env({"DELVE_MAX_ATTEMPTS": "3"}, max_attempts=7, loop_probability=None)
    assert c.max_attempts == 7
    assert c.loop_probability == 0.1


def test_generation_config_from_env_bad_number():
    with pytest.raises(ConfigurationError) as exc:
        GenerationConfig.from_env({"DELVE_MAX_ATTEMPTS": "many"})
    assert "DELVE_MAX_ATTEMPTS" in str(exc.value)


def test_configuration_error_is_raised_before_any_attempt(monkeypatch):
    # A bad config must never reach the retry loop
    calls = []
    import delve.topology.pipeline as pipeline

    monkeypatch.setattr(pipeline, "run_attempt", lambda *a, **k: calls.append(a))
    with pytest.raises(ConfigurationError):
        generate(GridBounds(5, 5, 9), 1)
    assert calls == []
