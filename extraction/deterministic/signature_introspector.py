#!/usr/bin/env python3
"""
Signature Introspector
=======================
Decide which declared parameters of a callable are query parameters.

Rules, first match wins:
1. Request-like envelope types are excluded
2. Registered resource-binding types are excluded
3. Route/path-bound names are excluded
4. Names tagged with ``@queryParam`` are included whatever their type
5. Primitive scalars are included unless tagged with ``@pathParam``
"""

import logging
from typing import Iterable, List, Optional, Set

from ..base import AnnotationBlock, Origin, ParameterDescriptor
from .annotation_parser import AnnotationBlockParser
from .type_inference import TypeInference

logger = logging.getLogger("query_extractor.deterministic.signature_introspector")


DEFAULT_PRIMITIVE_TYPES = {
    'string', 'str',
    'int', 'integer',
    'float', 'double',
    'bool', 'boolean',
}


class SignatureIntrospector:
    """
    Classify signature parameters as query inputs.

    The resource-binding registry replaces runtime "has a query() method"
    reflection: hosts register the type names that bind to a stored resource.
    """

    def __init__(
        self,
        request_type_marker: str = "Request",
        primitive_types: Optional[Iterable[str]] = None,
        resource_binding_types: Optional[Iterable[str]] = None,
    ):
        self.request_type_marker = request_type_marker
        self.primitive_types = {t.lower() for t in (primitive_types or DEFAULT_PRIMITIVE_TYPES)}
        self.resource_binding_types = {
            TypeInference.first_alternative(t) for t in (resource_binding_types or ())
        }

    def classify(
        self,
        parameters: List[ParameterDescriptor],
        raw_annotation_text: Optional[str],
        path_parameter_names: Optional[Set[str]] = None,
        block: Optional[AnnotationBlock] = None,
    ) -> List[ParameterDescriptor]:
        """
        Return the parameters that should be documented as query parameters.

        Args:
            parameters: Declared parameters in signature order
            raw_annotation_text: Comment block of the callable (may be None)
            path_parameter_names: Names bound to the route path
            block: Already parsed comment block, parsed from the text if omitted

        Returns:
            Surviving parameters, in signature order, with origin=Signature
        """
        path_names = set(path_parameter_names or ())
        if block is None:
            block = AnnotationBlockParser.parse(raw_annotation_text)
        tagged = {directive.name for directive in block.directives}
        path_tagged = set(block.path_parameters)
        result = []

        for param in parameters:
            if self.is_binding(param):
                logger.debug(f"Skipping '{param.name}': binding type {param.declared_type!r}")
                continue

            if param.name in path_names:
                logger.debug(f"Skipping '{param.name}': bound to route path")
                continue

            if param.name in tagged:
                result.append(self._as_signature(param))
                continue

            if self._is_primitive(param.declared_type) and param.name not in path_tagged:
                result.append(self._as_signature(param))

        return result

    def is_binding(self, param: ParameterDescriptor) -> bool:
        """True for parameters excluded by the request/resource-binding rules."""
        declared = param.declared_type or ""

        if self.request_type_marker and self.request_type_marker in declared:
            return True

        return TypeInference.first_alternative(declared) in self.resource_binding_types

    def excluded_bindings(self, parameters: List[ParameterDescriptor]) -> Set[str]:
        """Names of parameters that must never surface as query parameters."""
        return {param.name for param in parameters if self.is_binding(param)}

    def _is_primitive(self, declared_type: Optional[str]) -> bool:
        return TypeInference.first_alternative(declared_type).lower() in self.primitive_types

    @staticmethod
    def _as_signature(param: ParameterDescriptor) -> ParameterDescriptor:
        if param.origin is Origin.SIGNATURE:
            return param
        return ParameterDescriptor(
            name=param.name,
            declared_type=param.declared_type,
            optional=param.optional,
            origin=Origin.SIGNATURE,
        )
