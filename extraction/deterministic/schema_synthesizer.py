#!/usr/bin/env python3
"""
Schema Synthesizer
===================
Merge classified signature parameters and parsed directives into one
ordered mapping of parameter name → WireSchema.

Precedence:
- Signature parameters come first, in signature order
- A signature parameter's requiredness comes from the signature
- Directive-only parameters follow in source order, first one wins
"""

import logging
from typing import Dict, Iterable, List, Optional

from ..base import ExampleValue, ParameterDescriptor, RawDirective, WireSchema
from .type_inference import TypeInference

logger = logging.getLogger("query_extractor.deterministic.schema_synthesizer")


class SchemaSynthesizer:
    """Build final query parameter schemas."""

    @staticmethod
    def synthesize(
        signature_params: List[ParameterDescriptor],
        directives: List[RawDirective],
        examples: Optional[Dict[str, str]] = None,
        suppressed: Iterable[str] = (),
    ) -> Dict[str, WireSchema]:
        """
        Merge both sources into an ordered mapping.

        Args:
            signature_params: Output of the signature introspector
            directives: ``@queryParam`` records in source order
            examples: Standalone ``@example`` values by name
            suppressed: Names that must never appear (binding parameters)

        Returns:
            Dict keyed by parameter name, insertion order = first seen
        """
        examples = examples or {}
        suppressed = set(suppressed)
        schemas: Dict[str, WireSchema] = {}

        by_name: Dict[str, RawDirective] = {}
        for directive in directives:
            by_name.setdefault(directive.name, directive)

        for param in signature_params:
            if param.name in schemas or param.name in suppressed:
                continue

            directive = by_name.get(param.name)
            raw_example = directive.raw_example if directive and directive.raw_example else examples.get(param.name)

            schemas[param.name] = SchemaSynthesizer._build(
                name=param.name,
                token=param.declared_type,
                description=directive.raw_description if directive else "",
                required=not param.optional,
                raw_example=raw_example,
            )

        for directive in directives:
            if directive.name in schemas or directive.name in suppressed:
                continue

            schemas[directive.name] = SchemaSynthesizer._build(
                name=directive.name,
                token=directive.raw_type,
                description=directive.raw_description,
                required=directive.required,
                raw_example=directive.raw_example or examples.get(directive.name),
            )

        logger.debug(f"Synthesized {len(schemas)} query parameter schemas")
        return schemas

    @staticmethod
    def build_example(value: Optional[str]) -> Optional[ExampleValue]:
        if value is None or not value.strip():
            return None
        value = value.strip()
        return ExampleValue(
            value=value,
            type=TypeInference.infer_example_type(value),
            format=TypeInference.infer_example_format(value),
        )

    @staticmethod
    def _build(
        name: str,
        token: Optional[str],
        description: str,
        required: bool,
        raw_example: Optional[str],
    ) -> WireSchema:
        return WireSchema(
            description=description,
            required=required,
            type=TypeInference.canonical_wire_type(token),
            format=TypeInference.infer_format(token, name),
            example=SchemaSynthesizer.build_example(raw_example),
        )
