"""Input sources and line-set construction for setwise."""

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, FrozenSet, Iterator, Optional

from .config import CompareConfig
from .errors import LineTooLongError, SourceNotFoundError, SourceReadError
from .normalize import LineNormalizer

logger = logging.getLogger(__name__)

STDIN_SENTINEL = "-"
STDIN_LABEL = "<stdin>"


def source_label(source: str) -> str:
    """Return the display label for a source identifier."""
    return STDIN_LABEL if source == STDIN_SENTINEL else source


@dataclass(frozen=True)
class SourceSet:
    """Canonical tokens read from one input, with its label."""

    label: str
    tokens: FrozenSet[str]

    def __len__(self) -> int:
        return len(self.tokens)


class SourceReader:
    """Reads newline-delimited lines from a file path or standard input."""

    def __init__(self, source: str, max_line_bytes: int):
        """Initialize with source identifier and line size limit."""
        self.source = source
        self.label = source_label(source)
        self.max_line_bytes = max_line_bytes
        self._stream: Optional[BinaryIO] = None

    def __enter__(self) -> "SourceReader":
        """Context manager entry; opens the source."""
        if self.source == STDIN_SENTINEL:
            self._stream = sys.stdin.buffer
            return self

        path = Path(self.source)
        try:
            if not path.exists():
                raise SourceNotFoundError(self.source)
            self._stream = path.open("rb")
        except OSError as e:
            raise SourceReadError(self.source, f"failed to open file: {e}") from e
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit; closes files but never standard input."""
        stream, self._stream = self._stream, None
        if stream is None or self.source == STDIN_SENTINEL:
            return
        try:
            stream.close()
        except OSError as e:
            logger.warning(
                "Failed to close source",
                extra={"source": self.source, "error": str(e)},
            )

    def lines(self) -> Iterator[str]:
        """Yield decoded lines without their terminators."""
        if self._stream is None:
            raise RuntimeError("Source not opened")
        return read_lines(self._stream, self.label, self.max_line_bytes)


def read_lines(stream: BinaryIO, label: str, max_line_bytes: int) -> Iterator[str]:
    """Yield lines from a binary stream, rejecting lines over the limit.

    Bytes that are not valid UTF-8 are carried through as surrogate escapes
    so they survive the round trip to output unchanged.
    """
    line_number = 0
    while True:
        try:
            raw = stream.readline(max_line_bytes + 2)
        except OSError as e:
            raise SourceReadError(label, str(e)) from e
        if not raw:
            return
        line_number += 1

        if raw.endswith(b"\n"):
            body = raw[:-1]
            if body.endswith(b"\r"):
                body = body[:-1]
        else:
            body = raw
        if len(body) > max_line_bytes:
            raise LineTooLongError(label, line_number, max_line_bytes)

        yield body.decode("utf-8", errors="surrogateescape")


class SetBuilder:
    """Builds canonical line sets from input sources."""

    def __init__(self, config: CompareConfig):
        """Initialize with configuration."""
        self.config = config
        self.normalizer = LineNormalizer(config)

    def build(self, source: str) -> SourceSet:
        """Read ``source`` (a path or ``-``) into a SourceSet."""
        logger.debug("Reading source", extra={"source": source})
        with SourceReader(source, self.config.max_line_bytes) as reader:
            return self._collect(reader.label, reader.lines())

    def build_from_stream(self, stream: BinaryIO, label: str) -> SourceSet:
        """Read an already-open binary stream into a SourceSet."""
        return self._collect(label, read_lines(stream, label, self.config.max_line_bytes))

    def _collect(self, label: str, lines: Iterator[str]) -> SourceSet:
        tokens = set()
        skipped = 0
        for line in lines:
            token = self.normalizer.normalize(line)
            if token is None:
                skipped += 1
                continue
            tokens.add(token)

        logger.info(
            "Built line set",
            extra={"source": label, "tokens": len(tokens), "skipped": skipped},
        )
        return SourceSet(label=label, tokens=frozenset(tokens))
