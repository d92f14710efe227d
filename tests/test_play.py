import argparse

import pytest

from game.neon_swarm.play import build_config, main, parse_overrides


def test_parse_overrides_types():
    overrides = parse_overrides(["enemy_rows=5", "particle_decay=0.05", "time_scaled=true"])

    assert overrides == {"enemy_rows": 5, "particle_decay": 0.05, "time_scaled": True}


def test_parse_overrides_requires_equals():
    with pytest.raises(ValueError):
        parse_overrides(["enemy_rows"])


def test_build_config_applies_flags():
    args = argparse.Namespace(set=["enemyCols=6"], time_scaled=True)

    config = build_config(args)

    assert config.enemy_cols == 6
    assert config.time_scaled


def test_unknown_option_is_a_usage_error(capsys):
    with pytest.raises(SystemExit):
        main(["--headless", "--set", "warp_speed=9"])
    assert "warp_speed" in capsys.readouterr().err


def test_seeded_headless_runs_repeat(tmp_path, capsys):
    def run(name):
        main(["--headless", "--seed", "7", "--verbose", "0",
              "--high-score-file", str(tmp_path / name),
              "--set", "enemy_drop_height=60"])
        return capsys.readouterr().out

    assert run("a.json") == run("b.json")
