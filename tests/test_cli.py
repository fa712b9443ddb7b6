import json

from dungeon_walker.cli import main


def test_json_output(capsys):
    code = main(["--seed", "7", "--width", "20", "--height", "12", "--format", "json"])
    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert (data["width"], data["height"]) == (20, 12)
    assert data["spawn"] == [10, 6]
    assert len(data["rows"]) == 12
    assert data["regions"] == 1
    assert data["stats"]["iterations"] == 500
    assert data["floor_cells"] == sum(row.count(".") for row in data["rows"])


def test_text_output_is_reproducible(capsys):
    main(["--seed", "abc", "--width", "15", "--height", "10", "--iterations", "50"])
    first = capsys.readouterr().out
    main(["--seed", "abc", "--width", "15", "--height", "10", "--iterations", "50"])
    second = capsys.readouterr().out
    assert first == second
    lines = first.splitlines()
    assert len(lines) == 10
    assert lines[0] == "#" * 15


def test_invalid_dimensions_exit_code(capsys):
    assert main(["--width", "2"]) == 2
    assert "error" in capsys.readouterr().err


def test_string_seeds_that_look_numeric_are_accepted(capsys):
    for seed in ("--5", "²"):
        assert main([f"--seed={seed}", "--width", "10", "--height", "10", "--format", "json"]) == 0
        assert json.loads(capsys.readouterr().out)["seed"] == seed


def test_window_without_arcade_reports_error(monkeypatch, capsys):
    from dungeon_walker.app import arcade_app

    monkeypatch.setattr(arcade_app, "arcade", None)
    assert main(["--window", "--width", "10", "--height", "10"]) == 2
    assert "arcade" in capsys.readouterr().err.lower()
