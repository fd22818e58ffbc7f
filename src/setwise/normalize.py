"""Per-line normalization into canonical tokens."""

from typing import Optional

from .config import CompareConfig


class LineNormalizer:
    """Turns raw input lines into canonical tokens.

    Stages run in a fixed order, each feeding the next:

    1. strip surrounding whitespace (blank lines are skipped)
    2. fold to lowercase unless the comparison is case sensitive
    3. apply the extraction pattern, or else cut at the first delimiter
    4. cut at the first ``.`` when FQDNs are ignored
    5. remove the configured prefix and suffix when present

    Case folding precedes extraction, so patterns and delimiters see the
    folded line. A line the pattern does not match is skipped.
    """

    def __init__(self, config: CompareConfig):
        """Initialize with configuration."""
        self.config = config

    def normalize(self, line: str) -> Optional[str]:
        """Return the canonical token for ``line``, or None to skip it."""
        value = line.strip()
        if not value:
            return None

        if not self.config.case_sensitive:
            value = value.lower()

        if self.config.extract_regex is not None:
            extracted = self._extract(value)
            if extracted is None:
                return None
            value = extracted
        elif self.config.delimiter in value:
            value = value.split(self.config.delimiter, 1)[0].strip()

        if self.config.ignore_fqdn:
            value = value.split(".", 1)[0].strip()

        prefix = self.config.trim_prefix
        if prefix and value.startswith(prefix):
            value = value[len(prefix):]

        suffix = self.config.trim_suffix
        if suffix and value.endswith(suffix):
            value = value[: -len(suffix)]

        if not value.strip():
            return None
        return value

    def _extract(self, value: str) -> Optional[str]:
        """Apply the extraction pattern; None means no match."""
        match = self.config.extract_regex.search(value)
        if match is None:
            return None
        if match.re.groups:
            return (match.group(1) or "").strip()
        return match.group(0).strip()
