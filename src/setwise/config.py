"""Configuration management for setwise."""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .errors import ConfigInvalidError

OUTPUT_FORMATS = ("text", "json", "csv")

DEFAULT_MAX_LINE_BYTES = 64 * 1024


@dataclass(frozen=True)
class CompareConfig:
    """Configuration for line normalization and result reporting."""

    # Normalization
    case_sensitive: bool = False
    delimiter: str = ","
    ignore_fqdn: bool = False
    extract_pattern: Optional[str] = None
    trim_prefix: Optional[str] = None
    trim_suffix: Optional[str] = None

    # Reporting
    output_format: str = "text"
    output_path: Optional[str] = None
    count_only: bool = False
    stats: bool = False
    pipe: bool = False

    # Reader buffer size (bytes per line, terminator excluded)
    max_line_bytes: int = DEFAULT_MAX_LINE_BYTES

    extract_regex: Optional[re.Pattern] = field(
        default=None, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        """Validate configuration and compile the extraction pattern."""
        if not self.delimiter:
            raise ConfigInvalidError("delimiter", "must not be empty")
        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigInvalidError(
                "output_format",
                f"must be one of {', '.join(OUTPUT_FORMATS)}, got {self.output_format!r}",
            )
        if self.max_line_bytes <= 0:
            raise ConfigInvalidError("max_line_bytes", "must be positive")

        if self.extract_pattern is not None:
            try:
                compiled = re.compile(self.extract_pattern)
            except re.error as e:
                raise ConfigInvalidError("extract_pattern", str(e)) from e
            object.__setattr__(self, "extract_regex", compiled)

    @property
    def structured(self) -> bool:
        """Whether output uses a structured encoding (json or csv)."""
        return self.output_format != "text"

    def to_log_dict(self) -> Dict[str, Any]:
        """Convert config to a flat dictionary for debug logging."""
        return {
            "case_sensitive": self.case_sensitive,
            "delimiter": self.delimiter,
            "ignore_fqdn": self.ignore_fqdn,
            "extract_pattern": self.extract_pattern,
            "trim_prefix": self.trim_prefix,
            "trim_suffix": self.trim_suffix,
            "output_format": self.output_format,
            "output_path": self.output_path,
            "count_only": self.count_only,
            "stats": self.stats,
            "pipe": self.pipe,
            "max_line_bytes": self.max_line_bytes,
        }
