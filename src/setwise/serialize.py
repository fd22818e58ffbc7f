"""Deterministic serialization for setwise results."""

import json
import logging
from typing import Any, Dict, FrozenSet, Iterable, List, Tuple

from .algebra import DIFFERENCE, OPERATIONS, RelationResult, compute_statistics
from .errors import InvalidOperationError

logger = logging.getLogger(__name__)

FORWARD_LABEL = "A-B"
REVERSE_LABEL = "B-A"


def token_sort_key(token: str) -> bytes:
    """Sort key giving byte-wise order of the UTF-8 encoded token."""
    return token.encode("utf-8", errors="surrogateescape")


def sorted_tokens(tokens: Iterable[str]) -> List[str]:
    """Return tokens in byte-wise lexicographic order."""
    return sorted(tokens, key=token_sort_key)


def json_text(value: str) -> str:
    """Replace pass-through bytes that are not valid UTF-8 with U+FFFD."""
    return value.encode("utf-8", errors="surrogateescape").decode("utf-8", errors="replace")


def result_sections(result: RelationResult) -> List[Tuple[str, FrozenSet[str]]]:
    """Return (label, tokens) pairs for each result set that was computed."""
    if result.operation not in OPERATIONS:
        raise InvalidOperationError(result.operation)
    if result.operation == DIFFERENCE:
        sections = [(FORWARD_LABEL, result.primary)]
        if result.secondary is not None:
            sections.append((REVERSE_LABEL, result.secondary))
        return sections
    return [(result.operation, result.primary)]


class ResultSerializer:
    """Handles deterministic JSON serialization with stable ordering."""

    def serialize_result(self, result: RelationResult) -> Dict[str, Any]:
        """Serialize a relation result to a deterministic dictionary."""
        sections = result_sections(result)
        logger.debug(
            "Serializing result",
            extra={"operation": result.operation, "sections": len(sections)},
        )
        return {
            "operation": result.operation,
            "sources": {"a": json_text(result.set_a.label), "b": json_text(result.set_b.label)},
            "results": {
                label: [json_text(token) for token in sorted_tokens(tokens)]
                for label, tokens in sections
            },
            "counts": {label: len(tokens) for label, tokens in sections},
        }

    def serialize_statistics(self, result: RelationResult) -> Dict[str, Any]:
        """Serialize size and overlap statistics of the two inputs."""
        return compute_statistics(result.set_a, result.set_b).to_dict()

    def to_json_string(self, payload: Dict[str, Any]) -> str:
        """Convert payload to pretty-printed JSON string with trailing newline."""
        logger.debug("Rendering payload to JSON string")
        return json.dumps(payload, ensure_ascii=False, sort_keys=True, indent=2) + "\n"

    def create_success_envelope(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Create success envelope around payload."""
        logger.debug("Creating success envelope")
        return {"ok": True, "data": payload}

    def create_error_envelope(
        self, error_code: str, error_message: str, details: Dict[str, Any] = None
    ) -> Dict[str, Any]:
        """Create error envelope."""
        logger.debug("Creating error envelope", extra={"code": error_code})
        error_data = {
            "code": error_code,
            "message": error_message,
        }
        if details:
            error_data["details"] = details

        return {"ok": False, "error": error_data}
