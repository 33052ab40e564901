"""HTTP fetch capability: preflight checks, index fetch, bounded document download."""

import logging
import os
import ssl
import time
from typing import Optional

import httpx

from .config import AppConfig
from .errors import DependencyError
from .models import FailureKind, FetchResult

logger = logging.getLogger("docs_mirror")


class OversizeError(ValueError):
    pass


class Downloader:
    def __init__(self, config: AppConfig, transport: Optional[httpx.BaseTransport] = None):
        self.config = config
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    @property
    def client(self) -> httpx.Client:
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(
                timeout=httpx.Timeout(self.config.download.timeout),
                follow_redirects=True,
                headers={"User-Agent": self.config.download.user_agent},
                transport=self._transport,
            )
        return self._client

    def close(self):
        if self._client and not self._client.is_closed:
            self._client.close()

    def head(self, url: str) -> int:
        """HEAD request with the short connectivity timeout. Returns the status code."""
        resp = self.client.head(url, timeout=self.config.download.connect_timeout)
        return resp.status_code

    def fetch_text(self, url: str) -> str:
        """Fetch text/HTML from a URL. Raises httpx.HTTPError on failure."""
        resp = self.client.get(url)
        resp.raise_for_status()
        return resp.text

    def fetch_document(self, path: str, filename: str, scratch_dir: str) -> FetchResult:
        """Download one document into the scratch directory and run the content gates."""
        url = self.config.site.document_url(path)
        staged_path = os.path.join(scratch_dir, f"downloaded_{filename}")
        result = FetchResult(path=path, filename=filename, url=url)

        try:
            size = self._stream_download(url, staged_path)
        except httpx.HTTPError as e:
            _discard(staged_path)
            result.failure = FailureKind.TRANSPORT
            result.message = f"Failed to download {filename}: {_describe(e)}"
            return result
        except OversizeError as e:
            _discard(staged_path)
            result.failure = FailureKind.OVERSIZE
            result.message = f"File too large: {filename} ({e})"
            return result
        except OSError as e:
            _discard(staged_path)
            result.failure = FailureKind.STORAGE
            result.message = f"Cannot stage {filename}: {e}"
            return result

        if size == 0:
            _discard(staged_path)
            result.failure = FailureKind.EMPTY
            result.message = f"Downloaded empty file: {filename}"
            return result

        if not _looks_like_markdown(staged_path):
            logger.warning(f"File may not be markdown: {filename}")

        result.staged_path = staged_path
        result.size = size
        return result

    def _stream_download(self, url: str, local_path: str) -> int:
        """Stream a body to disk, aborting once it crosses the size ceiling.

        The timeout bounds the whole transfer, not each read.
        """
        max_size = self.config.download.max_file_size
        timeout = self.config.download.timeout
        deadline = time.monotonic() + timeout
        size = 0

        with self.client.stream("GET", url) as resp:
            resp.raise_for_status()

            content_length = resp.headers.get("content-length")
            if content_length and content_length.isdigit() and int(content_length) > max_size:
                raise OversizeError(f"{content_length} bytes")

            with open(local_path, "wb") as f:
                for chunk in resp.iter_bytes():
                    if time.monotonic() > deadline:
                        raise httpx.ReadTimeout(
                            f"transfer exceeded {timeout}s", request=resp.request
                        )
                    f.write(chunk)
                    size += len(chunk)
                    if size > max_size:
                        raise OversizeError(f"{size}+ bytes")

        return size


def check_dependencies(config: AppConfig, downloader: Downloader):
    """Preflight: secure transport must be available and the index reachable."""
    if not config.site.base_url.lower().startswith("https://"):
        raise DependencyError(f"Base URL is not HTTPS: {config.site.base_url}")

    try:
        ssl.create_default_context()
    except ssl.SSLError as e:
        raise DependencyError(f"TLS support unavailable: {e}") from e

    url = config.site.overview_url
    try:
        downloader.head(url)
    except httpx.HTTPError as e:
        raise DependencyError(f"Cannot connect to {url}: {_describe(e)}") from e


def _looks_like_markdown(path: str) -> bool:
    with open(path, "rb") as f:
        return f.readline().startswith(b"#")


def _discard(path: str):
    if os.path.isfile(path):
        os.remove(path)


def _describe(exc: httpx.HTTPError) -> str:
    if isinstance(exc, httpx.HTTPStatusError):
        return f"HTTP {exc.response.status_code} for {exc.request.url}"
    if isinstance(exc, httpx.TimeoutException):
        return f"timed out ({exc.__class__.__name__})"
    return str(exc) or exc.__class__.__name__
