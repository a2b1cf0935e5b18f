"""
Query parameter extractor: wires the deterministic pipeline together.

    signature ──► SignatureIntrospector ─┐
                                         ├──► SchemaSynthesizer ──► {name: WireSchema}
    comment   ──► AnnotationBlockParser ─┘
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, Iterable, List, Optional

from extraction_cache import ExtractionCache

from .base import ParameterDescriptor, SignatureNotFoundError, WireSchema, WireType
from .config import ExtractorConfig
from .logging_config import setup_logging
from .deterministic import AnnotationBlockParser, SchemaSynthesizer, SignatureIntrospector
from .signature_source import SignatureSource

logger = logging.getLogger("query_extractor.extractor")


class QueryParameterExtractor:
    """
    Extract query parameter schemas for one callable at a time.

    Calls are independent and side-effect free apart from the optional cache.
    """

    def __init__(self, config: Optional[ExtractorConfig] = None, cache: Optional[ExtractionCache] = None):
        self.config = config or ExtractorConfig()
        if cache is None and self.config.cache_enabled:
            cache = ExtractionCache()
        self.cache = cache
        self.introspector = SignatureIntrospector(
            request_type_marker=self.config.request_type_marker,
            primitive_types=self.config.primitive_types,
            resource_binding_types=self.config.resource_binding_types,
        )

    @classmethod
    def from_env(cls, cache: Optional[ExtractionCache] = None) -> "QueryParameterExtractor":
        """Build an extractor from environment configuration and set up its logging."""
        config = ExtractorConfig.from_env()
        setup_logging(config.log_level, config.log_file)
        return cls(config, cache=cache)

    def extract(
        self,
        parameters: List[ParameterDescriptor],
        raw_text: Optional[str],
        path_parameter_names: Optional[Iterable[str]] = None,
    ) -> Dict[str, WireSchema]:
        """
        Build the query parameter mapping for a declared signature.

        Args:
            parameters: Declared parameters in signature order
            raw_text: Comment block of the callable, or None
            path_parameter_names: Names bound to the route path

        Returns:
            Ordered mapping of parameter name → WireSchema (never None)
        """
        path_names = set(path_parameter_names or ())

        block = AnnotationBlockParser.parse(raw_text)
        query_params = self.introspector.classify(parameters, raw_text, path_names, block=block)

        return SchemaSynthesizer.synthesize(
            query_params,
            block.directives,
            examples=block.examples,
            suppressed=self.introspector.excluded_bindings(parameters),
        )

    def extract_from_callable(
        self,
        source: SignatureSource,
        reference: str,
        path_parameter_names: Optional[Iterable[str]] = None,
        http_method: Optional[str] = None,
    ) -> Dict[str, WireSchema]:
        """
        Resolve a callable through ``source`` and extract its query parameters.

        Unresolvable references yield an empty mapping, as do HTTP methods
        outside ``config.query_methods``.
        """
        if http_method is not None and http_method.upper() not in self.config.query_methods:
            logger.debug(f"No query parameters for {http_method.upper()} {reference}")
            return {}

        path_names = set(path_parameter_names or ())
        key = None
        if self.cache is not None:
            key = ExtractionCache.make_key(source.identity, reference, path_names)
            cached = self.cache.get(key)
            if cached is not None:
                return cached

        try:
            signature = source.load(reference)
        except SignatureNotFoundError as e:
            logger.debug(f"Nothing to extract: {e}")
            return {}

        schemas = self.extract(signature.parameters, signature.doc_comment, path_names)

        if self.cache is not None:
            self.cache.set(key, schemas)

        return schemas

    @staticmethod
    def to_openapi_parameters(schemas: Dict[str, WireSchema]) -> List[Dict[str, Any]]:
        """
        Convert a mapping into OpenAPI ``parameters`` entries.

        Example:
            >>> QueryParameterExtractor.to_openapi_parameters({"page": WireSchema("Page", True, "integer", "int32")})
            [{'name': 'page', 'in': 'query', 'required': True, 'schema': {'type': 'integer', 'format': 'int32'}, 'description': 'Page'}]
        """
        parameters = []

        for name, schema in schemas.items():
            param: Dict[str, Any] = {
                "name": name,
                "in": "query",
                "required": schema.required,
                "schema": {"type": schema.type},
                "description": schema.description,
            }

            if schema.format:
                param["schema"]["format"] = schema.format

            if schema.example is not None:
                param["example"] = _coerce_example(schema.example.value, schema.example.type)

            parameters.append(param)

        return parameters


def _coerce_example(value: str, example_type: str) -> Any:
    """Typed example value, or the raw string when it cannot be represented."""
    if example_type == WireType.INTEGER.value:
        try:
            return int(value)
        except ValueError:
            pass
        try:
            number = float(value)
            return int(number) if math.isfinite(number) else value
        except (ValueError, OverflowError):
            return value
    if example_type == WireType.NUMBER.value:
        try:
            number = float(value)
        except ValueError:
            return value
        return number if math.isfinite(number) else value
    if example_type == WireType.BOOLEAN.value:
        return value.lower() == "true"
    return value
