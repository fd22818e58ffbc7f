"""Service layer for setwise API - shares the comparison core with the CLI."""

import io
import logging
from typing import Any, Dict, Optional

from ...algebra import DIFFERENCE, compute_relation
from ...config import CompareConfig
from ...errors import SetwiseError
from ...serialize import ResultSerializer
from ...settings import get_max_line_bytes
from ...sources import SetBuilder

logger = logging.getLogger(__name__)


class CompareService:
    """Service class that encapsulates the core comparison logic."""

    def __init__(self):
        """Initialize service."""
        self.serializer = ResultSerializer()

    def process_compare_request(
        self,
        lines_a: str,
        lines_b: str,
        label_a: str = "A",
        label_b: str = "B",
        operation: str = DIFFERENCE,
        case_sensitive: bool = False,
        delimiter: str = ",",
        ignore_fqdn: bool = False,
        extract_pattern: Optional[str] = None,
        trim_prefix: Optional[str] = None,
        trim_suffix: Optional[str] = None,
        pipe: bool = False,
    ) -> Dict[str, Any]:
        """Process a compare request and return the complete JSON response."""
        logger.info(
            "Processing compare request",
            extra={"operation": operation, "label_a": label_a, "label_b": label_b},
        )

        try:
            config = CompareConfig(
                case_sensitive=case_sensitive,
                delimiter=delimiter,
                ignore_fqdn=ignore_fqdn,
                extract_pattern=extract_pattern,
                trim_prefix=trim_prefix,
                trim_suffix=trim_suffix,
                output_format="json",
                pipe=pipe,
                max_line_bytes=get_max_line_bytes(),
            )

            builder = SetBuilder(config)
            set_a = builder.build_from_stream(_to_stream(lines_a), label_a)
            set_b = builder.build_from_stream(_to_stream(lines_b), label_b)
            result = compute_relation(set_a, set_b, operation, pipe=config.pipe)

            payload = self.serializer.serialize_result(result)
            payload["statistics"] = self.serializer.serialize_statistics(result)
            payload["differences_found"] = not result.is_empty

            return self.serializer.create_success_envelope(payload)

        except SetwiseError as e:
            logger.warning("Compare request rejected", extra={"code": e.code})
            return self.serializer.create_error_envelope(e.code, e.message, e.details)


def _to_stream(text: str) -> io.BytesIO:
    return io.BytesIO(text.encode("utf-8", errors="surrogateescape"))
