from collections.abc import Iterator
from pathlib import Path

import pytest

from opito.core.global_paths import GlobalPath
from opito.util.log import Log, LogFormat, LogLevel


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def isolated_paths(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    log_dir = tmp_path / "_log"
    monkeypatch.setattr(GlobalPath, "log", classmethod(lambda cls: str(log_dir)))
    monkeypatch.setenv("OPITO_TEST_HOME", str(tmp_path / "_home"))
    monkeypatch.setenv("OPITO_CONFIG_DIR", str(tmp_path / "_config"))
    monkeypatch.delenv("OPITO_CONFIG_CONTENT", raising=False)
    try:
        yield
    finally:
        Log.configure(level=LogLevel.INFO, format=LogFormat.KV, console=False, file=False)
