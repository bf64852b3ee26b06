"""Line-oriented historical record sources.

The space-weather store only needs to iterate over the lines of a record
file. Where the file lives is up to the caller: a local path, text already
in memory, or a URL fetched once per process.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, Union

import requests

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class RecordSource(Protocol):
    """Anything that can yield the lines of a historical record."""

    name: str

    def lines(self) -> Iterator[str]:
        """Yield each line without its trailing newline."""
        ...


@dataclass(frozen=True)
class FileRecordSource:
    """A record file on disk, opened read-only on every scan.

    Attributes:
        path: Location of the record file.
    """

    path: PathLike

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", Path(self.path))

    @property
    def name(self) -> str:
        return str(self.path)

    def lines(self) -> Iterator[str]:
        try:
            f = open(self.path, "r", encoding="utf-8", errors="replace")
        except OSError as e:
            logger.error("Unable to open record file %s: %s", self.path, e)
            raise
        with f:
            for line in f:
                yield line.rstrip("\n\r")


@dataclass(frozen=True)
class TextRecordSource:
    """Record text held in memory."""

    text: str
    name: str = "<text>"

    def lines(self) -> Iterator[str]:
        yield from self.text.splitlines()


@dataclass
class HttpRecordSource:
    """A record file served over HTTP, downloaded on first use and cached.

    Attributes:
        url: Address of the record file.
        timeout_s: Request timeout in seconds.
    """

    url: str
    timeout_s: float = 30.0
    _session: requests.Session = field(default_factory=requests.Session, repr=False)
    _text: str | None = field(default=None, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @property
    def name(self) -> str:
        return self.url

    def _fetch(self) -> str:
        """Download the record text once.

        Raises:
            requests.HTTPError: If the server answers with an error status.
        """
        with self._lock:
            if self._text is None:
                response = self._session.get(self.url, timeout=self.timeout_s)
                response.raise_for_status()
                self._text = response.text
                logger.debug("Downloaded %d characters from %s", len(self._text), self.url)
            return self._text

    def lines(self) -> Iterator[str]:
        yield from self._fetch().splitlines()

    def refresh(self) -> None:
        """Drop the cached text so the next scan downloads it again."""
        with self._lock:
            self._text = None
