"""Shared fixtures: configuration builders and a fake GitHub backend."""

from __future__ import annotations

from pathlib import Path
from threading import Lock
from typing import Any, Callable

import httpx
import pytest
from structlog.testing import capture_logs

from gitignore_cli.config import GlobalConfig
from gitignore_cli.engine import CatalogFetcher, FetchCoordinator, Fetcher, TemplateDownloader

COMMIT_SHA = "3f1c2b9e0d"
RAW_PREFIX = "/github/gitignore/main/"


class FakeGitHub:
    """httpx handler emulating the commits, trees and raw endpoints."""

    def __init__(self, templates: dict[str, str | bytes], sha: str = COMMIT_SHA) -> None:
        self.templates = dict(templates)
        self.sha = sha
        self.extra_nodes: list[dict[str, Any]] = []
        self.failing: set[str] = set()
        self.offline = False
        self.commit_payload: Any = None
        self.tree_body: str | None = None
        self.truncated = False
        self.requests: list[str] = []
        self._lock = Lock()

    def handler(self, request: httpx.Request) -> httpx.Response:
        with self._lock:
            self.requests.append(f"{request.url.host}{request.url.path}")
        if self.offline:
            raise httpx.ConnectError("network unreachable", request=request)
        host, path = request.url.host, request.url.path
        if host == "api.github.com":
            if path == "/repos/github/gitignore/commits/main":
                payload = self.commit_payload if self.commit_payload is not None else {"sha": self.sha}
                return httpx.Response(200, json=payload)
            if path == f"/repos/github/gitignore/git/trees/{self.sha}":
                if self.tree_body is not None:
                    return httpx.Response(200, text=self.tree_body)
                tree = [
                    {"path": f"{name}.gitignore", "type": "blob", "sha": f"sha-{name}"}
                    for name in self.templates
                ]
                return httpx.Response(
                    200,
                    json={"sha": self.sha, "tree": tree + self.extra_nodes, "truncated": self.truncated},
                )
        if host == "raw.githubusercontent.com" and path.startswith(RAW_PREFIX):
            name = path[len(RAW_PREFIX):].removesuffix(".gitignore")
            if name in self.failing:
                return httpx.Response(500, text="boom")
            body = self.templates.get(name)
            if isinstance(body, bytes):
                return httpx.Response(200, content=body)
            if body is not None:
                return httpx.Response(200, text=body)
        return httpx.Response(404, text="Not Found")

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))

    @property
    def api_requests(self) -> list[str]:
        return [entry for entry in self.requests if entry.startswith("api.github.com")]

    @property
    def download_requests(self) -> list[str]:
        return [entry for entry in self.requests if entry.startswith("raw.githubusercontent.com")]


@pytest.fixture(autouse=True)
def captured_logs():
    with capture_logs() as logs:
        yield logs


@pytest.fixture
def sample_config() -> Callable[..., GlobalConfig]:
    def _builder(**overrides: Any) -> GlobalConfig:
        return GlobalConfig(**overrides)

    return _builder


@pytest.fixture
def fake_github() -> FakeGitHub:
    return FakeGitHub(
        {
            "Node": "node_modules/\nnpm-debug.log*\n",
            "Python": "__pycache__/\n*.py[cod]\n",
            "Go": "*.exe\n*.test\n",
        }
    )


@pytest.fixture
def build_coordinator(fake_github: FakeGitHub) -> Callable[..., FetchCoordinator]:
    clients: list[httpx.Client] = []

    def _builder(config: GlobalConfig | None = None, reporter=None) -> FetchCoordinator:
        config = config or GlobalConfig()
        client = fake_github.client()
        clients.append(client)
        fetcher = Fetcher(config, client=client)
        return FetchCoordinator(
            config,
            CatalogFetcher(config, fetcher),
            TemplateDownloader(config, fetcher),
            reporter=reporter,
        )

    yield _builder
    for client in clients:
        client.close()


class RecordingReporter:
    """Collect reporter events in call order."""

    def __init__(self) -> None:
        self.events: list[tuple[str, str]] = []
        self._lock = Lock()

    def _record(self, kind: str, name: str) -> None:
        with self._lock:
            self.events.append((kind, name))

    def success(self, name: str) -> None:
        self._record("success", name)

    def missing(self, key: str) -> None:
        self._record("missing", key)

    def failed(self, name: str) -> None:
        self._record("failed", name)

    def of(self, kind: str) -> list[str]:
        return [name for event, name in self.events if event == kind]


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "config-home"
    home.mkdir()
    monkeypatch.setenv("GITIGNORE_CLI_HOME", str(home))
    return home
