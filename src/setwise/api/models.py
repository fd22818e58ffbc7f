"""Pydantic models for setwise API requests and responses."""

import re
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ..algebra import DIFFERENCE, OPERATIONS


class CompareRequest(BaseModel):
    """Request model for compare endpoint."""

    lines_a: str = Field(
        ...,
        description="Newline-separated lines of the first input",
        examples=["host1.example.com\nhost2.example.com\n"],
    )
    lines_b: str = Field(
        ...,
        description="Newline-separated lines of the second input",
        examples=["host2\nhost3\n"],
    )
    label_a: str = Field("A", description="Label for the first input in results")
    label_b: str = Field("B", description="Label for the second input in results")
    operation: str = Field(
        DIFFERENCE,
        description="Set operation to apply",
        examples=list(OPERATIONS),
    )
    case_sensitive: bool = Field(False, description="Compare case sensitively")
    delimiter: str = Field(",", description="Keep only the text before this delimiter")
    ignore_fqdn: bool = Field(False, description="Keep only the text before the first dot")
    extract_pattern: Optional[str] = Field(
        None,
        description="Regular expression; first capture group (or whole match) is kept",
        examples=[r"host=(\S+)"],
    )
    trim_prefix: Optional[str] = Field(None, description="Prefix removed when present")
    trim_suffix: Optional[str] = Field(None, description="Suffix removed when present")
    pipe: bool = Field(False, description="Skip the reverse direction of a difference")

    @field_validator("operation")
    @classmethod
    def operation_must_be_known(cls, v):
        """Validate the operation name."""
        if v not in OPERATIONS:
            raise ValueError(f"operation must be one of {', '.join(OPERATIONS)}")
        return v

    @field_validator("delimiter")
    @classmethod
    def delimiter_must_not_be_empty(cls, v):
        """Validate the delimiter."""
        if not v:
            raise ValueError("delimiter cannot be empty")
        return v

    @field_validator("extract_pattern")
    @classmethod
    def extract_pattern_must_compile(cls, v):
        """Validate that the extraction pattern is a valid regular expression."""
        if v is None:
            return v
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"extract_pattern is not a valid regular expression: {e}")
        return v


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    status: str = Field(..., examples=["healthy"])
    version: str = Field(..., examples=["1.1.0"])


class VersionResponse(BaseModel):
    """Response model for version endpoint."""

    version: str = Field(..., examples=["1.1.0"])
    api_version: str = Field(..., examples=["v1"])
    supported_operations: list = Field(default_factory=lambda: list(OPERATIONS))
    supported_features: list = Field(
        default_factory=lambda: [
            "case_folding",
            "delimiter_split",
            "fqdn_stripping",
            "pattern_extraction",
            "prefix_suffix_trim",
            "statistics",
        ]
    )
