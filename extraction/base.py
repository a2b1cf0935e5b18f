"""
Shared data models for the docblock query parameter extractor.

All deterministic components import from this module.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


# =============================================================================
# ENUMS
# =============================================================================

class Origin(Enum):
    SIGNATURE = "Signature"
    ANNOTATION = "Annotation"


class WireType(str, Enum):
    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"


# =============================================================================
# EXCEPTIONS
# =============================================================================

class ExtractionError(Exception):
    """Base error for the extractor package."""


class SignatureNotFoundError(ExtractionError):
    """Raised by a signature source when a callable reference cannot be resolved."""

    def __init__(self, reference: str, reason: str = "not found"):
        self.reference = reference
        self.reason = reason
        super().__init__(f"Cannot resolve callable '{reference}': {reason}")


# =============================================================================
# DATA STRUCTURES
# =============================================================================

@dataclass(frozen=True)
class ParameterDescriptor:
    """A declared parameter of a callable. Identity key is ``name``."""
    name: str
    declared_type: Optional[str] = None   # Raw type token, may be a union
    optional: bool = False
    origin: Origin = Origin.SIGNATURE


@dataclass(frozen=True)
class RawDirective:
    """One ``@queryParam`` occurrence, in source order."""
    name: str
    raw_type: Optional[str]
    raw_description: str = ""
    raw_example: Optional[str] = None
    required: bool = True


@dataclass(frozen=True)
class ExampleValue:
    value: str
    type: str
    format: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"value": self.value, "type": self.type, "format": self.format}


@dataclass(frozen=True)
class WireSchema:
    """Final schema of one query parameter."""
    description: str
    required: bool
    type: str
    format: Optional[str] = None
    example: Optional[ExampleValue] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "description": self.description,
            "required": self.required,
            "type": self.type,
            "format": self.format,
        }
        if self.example is not None:
            result["example"] = self.example.to_dict()
        return result


@dataclass
class AnnotationBlock:
    """Everything the annotation parser recovers from one comment block."""
    directives: List[RawDirective] = field(default_factory=list)
    examples: Dict[str, str] = field(default_factory=dict)   # @example name value
    path_parameters: List[str] = field(default_factory=list)  # @pathParam name


@dataclass
class CallableSignature:
    """What a signature source hands to the extractor for one callable."""
    reference: str
    parameters: List[ParameterDescriptor] = field(default_factory=list)
    doc_comment: Optional[str] = None


def schemas_to_dict(schemas: Dict[str, WireSchema]) -> Dict[str, Dict[str, Any]]:
    """Plain nested-dict view of an extraction result, keeping key order."""
    return {name: schema.to_dict() for name, schema in schemas.items()}
