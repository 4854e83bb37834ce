"""Tests for the parse-build-run service, settings and source loading."""
from __future__ import annotations

import io

import pytest
import requests

from recipe_chef.config import RunnerSettings
from recipe_chef.exceptions import ChefBuildError, ChefError, ChefParseError, ChefSourceError
from recipe_chef.services.recipe_service import compile_program, cook, cook_to_string
from recipe_chef.sources import is_url, load_source

from .conftest import make_program, make_recipe


def test_cook_to_string(hello_world):
    assert cook_to_string(hello_world) == "Hello world!"


def test_cook_writes_to_output(hello_world):
    output = io.StringIO()
    frame = cook(hello_world, output=output)
    assert output.getvalue() == "Hello world!"
    assert frame.recipe.name == "Hello World Souffle"


def test_echo_input():
    text = make_recipe("Echo", ["g number"], [
        "Take number from the refrigerator.",
        "Put number into the mixing bowl.",
        "Pour contents of the mixing bowl into the baking dish.",
    ], serves=1)
    assert cook_to_string(text, inputs=[42]) == "42"


def test_compile_reports_each_stage():
    with pytest.raises(ChefParseError):
        compile_program("Soup.\n\nMethod.\nJuggle.\n")
    with pytest.raises(ChefBuildError):
        compile_program(make_recipe("Soup", [], ["Serve with bread."]))


def test_compile_program_keeps_auxiliary_recipes():
    program = compile_program(make_program(
        make_recipe("Main", [], ["Serve with sauce."]),
        make_recipe("Sauce", [], ["Clean the mixing bowl."], serves=1),
    ))
    assert [recipe.name for recipe in program.recipes.values()] == ["Main", "Sauce"]


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("RECIPE_CHEF_MAX_CALL_DEPTH", "12")
    monkeypatch.setenv("RECIPE_CHEF_SEED", "3")
    monkeypatch.delenv("RECIPE_CHEF_TIMEOUT", raising=False)
    monkeypatch.delenv("RECIPE_CHEF_MAX_SOURCE_BYTES", raising=False)

    settings = RunnerSettings.from_env(seed=9, max_source_bytes=None)

    assert settings.max_call_depth == 12
    assert settings.seed == 9
    assert settings.timeout == 30
    assert settings.max_source_bytes == 1024 * 1024


def test_invalid_settings(monkeypatch):
    monkeypatch.setenv("RECIPE_CHEF_MAX_CALL_DEPTH", "0")
    with pytest.raises(ChefError, match="Invalid settings"):
        RunnerSettings.from_env()


def test_load_file(tmp_path, hello_world):
    path = tmp_path / "hello.chef"
    path.write_text(hello_world, encoding="utf-8")
    assert load_source(str(path)) == hello_world


def test_load_missing_file(tmp_path):
    with pytest.raises(ChefSourceError, match="Cannot read"):
        load_source(str(tmp_path / "missing.chef"))


def test_load_oversize_file(tmp_path, hello_world):
    path = tmp_path / "hello.chef"
    path.write_text(hello_world, encoding="utf-8")
    with pytest.raises(ChefSourceError, match="exceeds"):
        load_source(str(path), RunnerSettings(max_source_bytes=10))


def test_is_url():
    assert is_url("https://example.com/hello.chef")
    assert is_url("http://example.com/hello.chef")
    assert not is_url("recipes/hello.chef")


class FakeResponse:
    def __init__(self, body: bytes, content_type: str = "text/plain", status: int = 200) -> None:
        self.body = body
        self.headers = {"content-type": content_type}
        self.status_code = status
        self.encoding = "utf-8"

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} error", response=self)

    def iter_content(self, chunk_size: int = 8192):
        for start in range(0, len(self.body), chunk_size):
            yield self.body[start:start + chunk_size]


class FakeSession:
    """Returns (or raises) each outcome in turn, repeating the last one."""

    def __init__(self, *outcomes) -> None:
        self.outcomes = list(outcomes)
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        outcome = self.outcomes[min(len(self.calls), len(self.outcomes)) - 1]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture(autouse=True)
def no_backoff(monkeypatch):
    sleeps = []
    monkeypatch.setattr("recipe_chef.sources.time.sleep", sleeps.append)
    return sleeps


def test_load_url(hello_world):
    session = FakeSession(FakeResponse(hello_world.encode("utf-8")))
    text = load_source("https://example.com/hello.chef", RunnerSettings(timeout=5), session=session)
    assert text == hello_world
    assert session.calls[0][1]["timeout"] == 5


def test_load_url_http_error():
    session = FakeSession(FakeResponse(b"", status=404))
    with pytest.raises(ChefSourceError, match="Failed to fetch"):
        load_source("https://example.com/missing.chef", session=session)
    assert len(session.calls) == 1


def test_load_url_connection_error():
    session = FakeSession(requests.exceptions.ConnectionError("refused"))
    with pytest.raises(ChefSourceError, match="refused"):
        load_source("https://example.com/hello.chef", session=session)
    assert len(session.calls) == 3


def test_load_url_retries_server_errors(hello_world, no_backoff):
    session = FakeSession(FakeResponse(b"", status=503), FakeResponse(hello_world.encode("utf-8")))
    assert load_source("https://example.com/hello.chef", session=session) == hello_world
    assert len(session.calls) == 2
    assert no_backoff == [1]


def test_load_url_retries_timeouts(hello_world, no_backoff):
    session = FakeSession(
        requests.exceptions.Timeout("slow"),
        requests.exceptions.Timeout("slow"),
        FakeResponse(hello_world.encode("utf-8")),
    )
    assert load_source("https://example.com/hello.chef", session=session) == hello_world
    assert no_backoff == [1, 2]


def test_load_url_rejects_binary():
    session = FakeSession(FakeResponse(b"\x89PNG", content_type="image/png"))
    with pytest.raises(ChefSourceError, match="content type"):
        load_source("https://example.com/cake.png", session=session)


def test_load_url_size_limit():
    session = FakeSession(FakeResponse(b"x" * 100))
    with pytest.raises(ChefSourceError, match="exceeds"):
        load_source("https://example.com/big.chef", RunnerSettings(max_source_bytes=50), session=session)
