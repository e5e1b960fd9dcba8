"""Document fetchers for reference data.

A fetcher turns a document name ("races", "perks", ...) into parsed JSON.
Transport problems surface as FetchFailure; the shape of the payload is
the repository's business.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Protocol

import requests
from loguru import logger

from skyrim_planner.errors import FetchFailure


class DocumentFetcher(Protocol):
    def fetch(self, name: str) -> Any: ...


class DirectoryFetcher:
    """Reads `<root>/<name>.json` from disk."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def fetch(self, name: str) -> Any:
        path = self.root / f"{name}.json"
        logger.debug(f"Reading reference document {path}")
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise FetchFailure(f"404 Not Found: {path}") from None
        except OSError as exc:
            raise FetchFailure(f"Could not read {path}: {exc}") from exc
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise FetchFailure(f"{path} is not valid JSON: {exc}") from exc


class HttpFetcher:
    """GETs `<base_url>/<name>.json` over HTTP."""

    def __init__(
        self,
        base_url: str,
        session: requests.Session | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def fetch(self, name: str) -> Any:
        url = f"{self.base_url}/{name}.json"
        logger.debug(f"Fetching reference document {url}")
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise FetchFailure(f"Request for {url} failed: {exc}") from exc
        if not response.ok:
            raise FetchFailure(f"{response.status_code} {response.reason}")
        try:
            return response.json()
        except ValueError as exc:
            raise FetchFailure(f"{url} did not return JSON: {exc}") from exc


def fetcher_for(source: str | Path, timeout: float = 10.0) -> DocumentFetcher:
    """Pick a fetcher for a directory path or an http(s) base URL."""
    text = str(source)
    if text.startswith(("http://", "https://")):
        return HttpFetcher(text, timeout=timeout)
    return DirectoryFetcher(Path(text).expanduser())
