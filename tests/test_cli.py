"""Tests for the recipe-chef command line."""
from __future__ import annotations

import pytest

import chef_runner

from .conftest import make_program, make_recipe

ECHO = make_recipe("Echo", ["g first", "g second"], [
    "Take first from the refrigerator.",
    "Take second from the refrigerator.",
    "Put first into the mixing bowl.",
    "Put second into the mixing bowl.",
    "Pour contents of the mixing bowl into the baking dish.",
], serves=1)


@pytest.fixture
def recipe_file(tmp_path):
    def write(text: str):
        path = tmp_path / "recipe.chef"
        path.write_text(text, encoding="utf-8")
        return str(path)
    return write


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("RECIPE_CHEF_SEED", "RECIPE_CHEF_MAX_CALL_DEPTH",
                 "RECIPE_CHEF_TIMEOUT", "RECIPE_CHEF_MAX_SOURCE_BYTES"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(chef_runner, "load_dotenv", lambda: None)


def test_run(recipe_file, hello_world, capsys):
    assert chef_runner.main([recipe_file(hello_world)]) == 0
    assert capsys.readouterr().out == "Hello world!"


def test_input_values(recipe_file, capsys):
    assert chef_runner.main([recipe_file(ECHO), "--input", "4 5"]) == 0
    assert capsys.readouterr().out == "54"


def test_input_file(recipe_file, tmp_path, capsys):
    values = tmp_path / "values.txt"
    values.write_text("7\n8\n", encoding="utf-8")
    assert chef_runner.main([recipe_file(ECHO), "--input-file", str(values)]) == 0
    assert capsys.readouterr().out == "87"


def test_check(recipe_file, capsys):
    text = make_program(
        make_recipe("Main", ["1 g a"], ["Serve with sauce."]),
        make_recipe("Sauce", [], ["Clean the mixing bowl."]),
    )
    assert chef_runner.main([recipe_file(text), "--check"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == [
        "Main (main): 1 ingredient(s), 1 instruction(s)",
        "Sauce (auxiliary): 0 ingredient(s), 1 instruction(s)",
    ]


def test_parse_error_exits_1(recipe_file, caplog):
    assert chef_runner.main([recipe_file("Soup.\n\nMethod.\nJuggle.\n")]) == 1
    assert "Juggle" in caplog.text


def test_run_error_exits_1(recipe_file, caplog):
    assert chef_runner.main([recipe_file(ECHO), "--input", "4"]) == 1
    assert "exhausted" in caplog.text


def test_missing_source_exits_1(tmp_path):
    assert chef_runner.main([str(tmp_path / "missing.chef")]) == 1


def test_call_depth_flag(recipe_file, caplog):
    text = make_recipe("Forever", [], ["Serve with forever."])
    assert chef_runner.main([recipe_file(text), "--max-call-depth", "5"]) == 1
    assert "deeper than 5" in caplog.text


def test_usage_error():
    with pytest.raises(SystemExit) as excinfo:
        chef_runner.main([])
    assert excinfo.value.code == 2
