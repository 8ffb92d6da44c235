"""Pydantic models for API I/O."""

from .classification import ClassifyRequest, ClassifyResponse, GroupClassificationResponse

__all__ = [
    "ClassifyRequest",
    "ClassifyResponse",
    "GroupClassificationResponse",
]
