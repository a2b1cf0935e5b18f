"""
Docblock query parameter extractor.

Exports the data models, the deterministic pipeline components and the
QueryParameterExtractor facade.
"""

from .base import (
    Origin,
    WireType,
    ExtractionError,
    SignatureNotFoundError,
    ParameterDescriptor,
    RawDirective,
    ExampleValue,
    WireSchema,
    AnnotationBlock,
    CallableSignature,
    schemas_to_dict,
)

from .deterministic import (
    TypeInference,
    SignatureIntrospector,
    AnnotationBlockParser,
    SchemaSynthesizer,
)
from .config import ExtractorConfig
from .logging_config import setup_logging
from .signature_source import SignatureSource, StaticSignatureSource, PythonSourceSignatureSource
from .extractor import QueryParameterExtractor

__version__ = "1.0.0"

__all__ = [
    # Data models
    "Origin",
    "WireType",
    "ExtractionError",
    "SignatureNotFoundError",
    "ParameterDescriptor",
    "RawDirective",
    "ExampleValue",
    "WireSchema",
    "AnnotationBlock",
    "CallableSignature",
    "schemas_to_dict",
    # Pipeline
    "TypeInference",
    "SignatureIntrospector",
    "AnnotationBlockParser",
    "SchemaSynthesizer",
    # Facade and ambient
    "ExtractorConfig",
    "setup_logging",
    "SignatureSource",
    "StaticSignatureSource",
    "PythonSourceSignatureSource",
    "QueryParameterExtractor",
]
