"""Local file writer — appends records to a file on the local filesystem.

Accepts plain paths and ``file://`` URIs.  Parent directories are created
when the writer opens; records are flushed one at a time.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO
from urllib.parse import unquote, urlparse

from dynsink.writers import WriterStateError

logger = logging.getLogger(__name__)


def local_path(destination: str) -> Path:
    """Map a destination string to a local ``Path``.

    Raises
    ------
    ValueError
        If *destination* is a URI with a scheme other than ``file``.

    Examples
    --------
    >>> local_path("file:///var/log/app.log").as_posix()
    '/var/log/app.log'
    >>> local_path("logs/app.log").as_posix()
    'logs/app.log'
    """
    parsed = urlparse(destination)
    if parsed.scheme in ("", "file") or len(parsed.scheme) == 1:
        if parsed.scheme == "file":
            return Path(unquote(parsed.netloc + parsed.path))
        return Path(destination)
    raise ValueError(
        f"Unsupported destination scheme '{parsed.scheme}' in {destination!r}; "
        "only local paths and file:// URIs can be written"
    )


class LocalFileWriter:
    """Appends serialized records to one local file.

    Parameters
    ----------
    destination:
        Plain filesystem path or ``file://`` URI.
    """

    def __init__(self, destination: str) -> None:
        self._destination = destination
        self._file_path = local_path(destination)
        self._fh: BinaryIO | None = None
        self.bytes_written = 0

    @property
    def path(self) -> str:
        return self._destination

    @property
    def file_path(self) -> Path:
        return self._file_path

    @property
    def is_open(self) -> bool:
        return self._fh is not None

    def open(self) -> None:
        if self._fh is not None:
            raise WriterStateError(f"Writer for {self._destination} is already open")
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._fh = self._file_path.open("ab")
        logger.debug("LocalFileWriter: opened %s", self._file_path)

    def append(self, data: bytes) -> None:
        if self._fh is None:
            raise WriterStateError(f"Writer for {self._destination} is not open")
        self._fh.write(data)
        self._fh.flush()
        self.bytes_written += len(data)

    def close(self) -> None:
        if self._fh is None:
            return
        fh, self._fh = self._fh, None
        fh.close()
        logger.debug(
            "LocalFileWriter: closed %s (%d bytes)", self._file_path, self.bytes_written
        )

    def __repr__(self) -> str:
        state = "open" if self.is_open else "closed"
        return f"<LocalFileWriter {self._destination} {state}>"
