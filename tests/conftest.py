import io
import os
import pytest
from typing import Callable, Iterable, List
from rich.console import Console

# Keep a developer's local config file out of the test runs
os.environ.pop("SVCAUDIT_CONFIG", None)

from svcaudit_core.config import AuditConfig
from svcaudit_core.core.base_source import ServiceSource
from svcaudit_core.core.context import AuditContext
from svcaudit_core.errors import SourceUnavailableError
from svcaudit_core.models.findings import ServiceRecord, VerbosityLevel
from svcaudit_core.output.reporter import ResultReporter


def make_console() -> Console:
    # plain text, wide enough that nothing wraps
    return Console(file=io.StringIO(), width=300, color_system=None, force_terminal=False)


def console_text(console: Console) -> str:
    return console.file.getvalue()


class FakeSource(ServiceSource):
    """In-memory source; fails before yielding anything when `available` is False."""

    def __init__(self, name: str, records: Iterable[ServiceRecord] = (), available: bool = True,
                 context: AuditContext = None, calls: List[str] = None):
        super().__init__(context or AuditContext())
        self.name = name
        self.records = list(records)
        self.available = available
        self.calls = calls if calls is not None else []

    def iter_services(self):
        self.calls.append(self.name)
        if not self.available:
            raise SourceUnavailableError(self.name, "mechanism unavailable")
        yield from self.records


@pytest.fixture
def fake_tool(tmp_path) -> Callable[[bytes], str]:
    """Builds an executable that ignores its arguments and prints the given raw bytes."""
    if os.name == "nt":
        pytest.skip("fake tools are POSIX shell scripts")

    def _make(output: bytes, name: str = "tool") -> str:
        data = tmp_path / f"{name}.out"
        data.write_bytes(output)
        script = tmp_path / name
        script.write_text(f"#!/bin/sh\ncat '{data}'\n")
        script.chmod(0o755)
        return str(script)
    return _make


@pytest.fixture
def console() -> Console:
    return make_console()


@pytest.fixture
def reporter(console) -> ResultReporter:
    return ResultReporter(console)


@pytest.fixture
def make_context() -> Callable[..., AuditContext]:
    def _make(verbosity: int = 0, **config) -> AuditContext:
        return AuditContext(verbosity=VerbosityLevel(verbosity), config=AuditConfig(**config))
    return _make
