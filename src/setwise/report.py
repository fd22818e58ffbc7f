"""Rendering and output of relation results."""

import csv
import io
import logging
import sys
from pathlib import Path
from typing import BinaryIO, List, Optional

from .algebra import (
    DIFFERENCE,
    INTERSECTION,
    SYMMETRIC_DIFFERENCE,
    UNION,
    RelationResult,
    compute_statistics,
)
from .config import CompareConfig
from .errors import InvalidOperationError, SinkOpenError, SinkWriteError
from .serialize import (
    FORWARD_LABEL,
    REVERSE_LABEL,
    ResultSerializer,
    result_sections,
    sorted_tokens,
)

logger = logging.getLogger(__name__)

HEADERS = {
    INTERSECTION: "Intersection of {a} and {b}:",
    UNION: "Union of {a} and {b}:",
    SYMMETRIC_DIFFERENCE: "Symmetric difference of {a} and {b}:",
    DIFFERENCE: "Difference of {a} - {b}:",
}


class OutputSink:
    """Writable destination: a file when a path is given, else stdout."""

    def __init__(self, path: Optional[str] = None):
        """Initialize with optional output file path."""
        self.path = path
        self._stream: Optional[BinaryIO] = None

    def __enter__(self) -> "OutputSink":
        """Context manager entry; creates or truncates the output file."""
        if self.path is None:
            self._stream = sys.stdout.buffer
            return self
        try:
            self._stream = Path(self.path).open("wb")
        except OSError as e:
            raise SinkOpenError(self.path, str(e)) from e
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit; closes the file or flushes stdout."""
        stream, self._stream = self._stream, None
        if stream is None:
            return
        try:
            if self.path is None:
                stream.flush()
            else:
                stream.close()
        except OSError as e:
            logger.warning(
                "Failed to close output",
                extra={"path": self.path or "<stdout>", "error": str(e)},
            )

    def write(self, text: str) -> None:
        """Encode and write text, restoring any pass-through bytes."""
        if self._stream is None:
            raise RuntimeError("Sink not opened")
        try:
            self._stream.write(text.encode("utf-8", errors="surrogateescape"))
        except OSError as e:
            raise SinkWriteError(self.path or "<stdout>", str(e)) from e


class Reporter:
    """Renders relation results according to the configured mode."""

    def __init__(self, config: CompareConfig):
        """Initialize with configuration."""
        self.config = config
        self.serializer = ResultSerializer()

    def report(self, result: RelationResult) -> bool:
        """Write the rendered result to the sink.

        Returns True when the result holds any token, i.e. differences
        were found.
        """
        output = self.render(result)
        with OutputSink(self.config.output_path) as sink:
            sink.write(output)
        logger.info(
            "Report written",
            extra={
                "operation": result.operation,
                "destination": self.config.output_path or "<stdout>",
                "empty": result.is_empty,
            },
        )
        return not result.is_empty

    def render(self, result: RelationResult) -> str:
        """Render the result; json/csv win over count, count over stats."""
        if result.operation not in HEADERS:
            raise InvalidOperationError(result.operation)

        if self.config.output_format == "json":
            return self.render_json(result)
        if self.config.output_format == "csv":
            return self.render_csv(result)
        if self.config.count_only:
            return self.render_count(result)
        if self.config.stats:
            return self.render_stats(result)
        return self.render_text(result)

    def render_json(self, result: RelationResult) -> str:
        return self.serializer.to_json_string(self.serializer.serialize_result(result))

    def render_csv(self, result: RelationResult) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        if result.operation == DIFFERENCE:
            writer.writerow(["set", "value"])
            for label, tokens in result_sections(result):
                for token in sorted_tokens(tokens):
                    writer.writerow([label, token])
        else:
            writer.writerow(["value"])
            for token in sorted_tokens(result.primary):
                writer.writerow([token])
        return buffer.getvalue()

    def render_count(self, result: RelationResult) -> str:
        if result.operation != DIFFERENCE:
            return f"{len(result.primary)}\n"
        lines = [f"{FORWARD_LABEL}: {len(result.primary)}"]
        if result.secondary is not None:
            lines.append(f"{REVERSE_LABEL}: {len(result.secondary)}")
        return "\n".join(lines) + "\n"

    def render_stats(self, result: RelationResult) -> str:
        stats = compute_statistics(result.set_a, result.set_b)
        a, b = result.set_a.label, result.set_b.label

        if stats.percent_of_a is None:
            common = f"Common: {stats.overlap}"
        else:
            common = (
                f"Common: {stats.overlap} "
                f"({stats.percent_of_a:.1f}% of A, {stats.percent_of_b:.1f}% of B)"
            )

        lines = [
            f"A ({a}): {stats.size_a}",
            f"B ({b}): {stats.size_b}",
            common,
            f"Only in A: {stats.only_a}",
            f"Only in B: {stats.only_b}",
        ]
        return "\n".join(lines) + "\n"

    def render_text(self, result: RelationResult) -> str:
        a, b = result.set_a.label, result.set_b.label
        lines: List[str] = []

        if not self.config.pipe:
            lines.append(HEADERS[result.operation].format(a=a, b=b))
        lines.extend(sorted_tokens(result.primary))

        if result.operation == DIFFERENCE and not self.config.pipe:
            lines.append("")
            lines.append(HEADERS[DIFFERENCE].format(a=b, b=a))
            lines.extend(sorted_tokens(result.secondary or ()))

        if not lines:
            return ""
        return "\n".join(lines) + "\n"
