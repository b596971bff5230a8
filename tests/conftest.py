import io
import typing as t

import orjson
import pytest


@pytest.fixture(scope="function")
def sink() -> io.BytesIO:
    """
    Function-scoped in-memory binary sink.
    Each test starts from an empty stream.
    """
    return io.BytesIO()


@pytest.fixture(scope="function")
def read_events() -> t.Callable[[io.BytesIO], list[dict[str, t.Any]]]:
    """Decode every JSON line written to a binary sink."""

    def _read(sink: io.BytesIO) -> list[dict[str, t.Any]]:
        return [orjson.loads(line) for line in sink.getvalue().splitlines()]

    return _read


@pytest.fixture(scope="function", autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """
    Keeps TOROLOG_* variables and any local .env file out of the tests.
    """
    for key in ("TOROLOG_LEVEL", "TOROLOG_STREAM"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
