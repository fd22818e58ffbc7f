"""Compare routes for setwise API."""

import logging
from typing import Any, Dict

from fastapi import APIRouter, HTTPException

from ...errors import SetwiseError
from ..models import CompareRequest
from ..services import CompareService

router = APIRouter(tags=["compare"])

logger = logging.getLogger(__name__)

compare_service = CompareService()


@router.post("/compare")
def create_comparison(request: CompareRequest) -> Dict[str, Any]:
    """Compare two line lists as sets."""
    logger.info(
        "Received compare request",
        extra={"operation": request.operation, "label_a": request.label_a},
    )

    try:
        result = compare_service.process_compare_request(**request.model_dump())
        logger.info(
            "Compare request completed",
            extra={"operation": request.operation, "ok": result.get("ok")},
        )
        return result

    except (HTTPException, SetwiseError):
        raise
    except Exception as exc:
        logger.exception("Compare request failed", extra={"operation": request.operation})
        raise HTTPException(
            status_code=500,
            detail={
                "ok": False,
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": f"Failed to process comparison: {str(exc)}",
                    "details": {"exception_type": type(exc).__name__},
                },
            },
        ) from exc
