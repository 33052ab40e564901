from collections.abc import Callable, Iterator
from pathlib import Path

import httpx
import pytest

from docs_mirror.config import AppConfig
from docs_mirror.downloader import Downloader

BASE = "https://docs.anthropic.com"
OVERVIEW = f"{BASE}/en/docs/claude-code/overview"


@pytest.fixture
def config(tmp_path: Path) -> AppConfig:
    return AppConfig(
        target_dir=str(tmp_path / "claude-code-docs"),
        reports_dir=str(tmp_path / "reports"),
    )


@pytest.fixture
def scratch_dir(tmp_path: Path) -> Path:
    path = tmp_path / "scratch"
    path.mkdir()
    return path


class FakeSite:
    """Routes GET/HEAD requests to canned responses keyed by URL."""

    def __init__(self) -> None:
        self.routes: dict[str, object] = {}
        self.requests: list[httpx.Request] = []

    def set(self, url: str, body: object, status_code: int = 200) -> None:
        self.routes[url] = (status_code, body)

    def fail(self, url: str, exc_factory: Callable[[httpx.Request], Exception]) -> None:
        self.routes[url] = exc_factory

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(str(request.url))
        if route is None:
            return httpx.Response(404, content=b"not found")
        if callable(route):
            raise route(request)
        status_code, body = route
        if request.method == "HEAD":
            return httpx.Response(status_code)
        if isinstance(body, str):
            body = body.encode("utf-8")
        return httpx.Response(status_code, content=body)

    def fetched(self) -> list[str]:
        return [str(r.url) for r in self.requests if r.method == "GET"]


@pytest.fixture
def site() -> FakeSite:
    return FakeSite()


@pytest.fixture
def downloader(config: AppConfig, site: FakeSite) -> Iterator[Downloader]:
    dl = Downloader(config, transport=httpx.MockTransport(site.handler))
    yield dl
    dl.close()


def index_html(*hrefs: str) -> str:
    links = "\n".join(f'<li><a href="{href}">{href}</a></li>' for href in hrefs)
    return f"<html><body><nav><ul>\n{links}\n</ul></nav></body></html>"
