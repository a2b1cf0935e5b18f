#!/usr/bin/env python3
"""
Deterministic Extraction Pipeline
==================================
Pattern-based components that turn a declared signature and its comment
block into query parameter schemas.

Dependency order (leaves first):
- Type/format inference
- Signature introspection
- Annotation block parsing
- Schema synthesis
"""

from .type_inference import TypeInference
from .signature_introspector import SignatureIntrospector, DEFAULT_PRIMITIVE_TYPES
from .annotation_parser import AnnotationBlockParser
from .schema_synthesizer import SchemaSynthesizer

__all__ = [
    'TypeInference',
    'SignatureIntrospector',
    'DEFAULT_PRIMITIVE_TYPES',
    'AnnotationBlockParser',
    'SchemaSynthesizer',
]
