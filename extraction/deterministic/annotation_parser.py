#!/usr/bin/env python3
"""
Annotation Block Parser
========================
Extract query parameter directives from a free-text comment block.

Supported directives:
- ``@queryParam <name> [<type>] <description...>``
- ``@queryParam {<type>} <name> <description...>``
- ``@pathParam <name>``
- ``@example <name> <value>``

A directive's text runs until the next ``@`` directive or the end of the
block. Works on PHP docblocks (``/** ... */``), ``#``/``//`` comment runs and
plain docstrings alike.

The parser is total: malformed directives are dropped, nothing raises.
"""

import logging
import re
from typing import List, Optional, Tuple

from ..base import AnnotationBlock, RawDirective

logger = logging.getLogger("query_extractor.deterministic.annotation_parser")


# "@tag" starting a directive: only at line start or after whitespace,
# so e-mail addresses inside descriptions are not split.
DIRECTIVE_PATTERN = re.compile(r'(?<!\S)@([A-Za-z][\w-]*)')

# "{type} name rest"
BRACED_FORM = re.compile(r'^\{([^{}]*)\}\s*([A-Za-z_][\w.\[\]]*)?(.*)$', re.DOTALL)

# "name rest"
BARE_FORM = re.compile(r'^([A-Za-z_][\w.\[\]]*)(.*)$', re.DOTALL)

# "@example name value" / "@pathParam name"
NAMED_VALUE = re.compile(r'^(?:\{[^{}]*\}\s*)?([A-Za-z_][\w.\[\]]*)(.*)$', re.DOTALL)

# Capitalised marker only, so prose like "for example:" stays in the description
INLINE_EXAMPLE = re.compile(r'\bExample:')

TYPE_WORD = re.compile(r'^[A-Za-z_\\?][\w\\?\[\]<>,|]*$')

COMMENT_DECORATION = re.compile(r'^\s*(?:/\*\*?|\*/|\*|//+|#)?')


class AnnotationBlockParser:
    """
    Tolerant parser for docblock parameter annotations.

    Both ``@queryParam`` surface forms are scanned in independent passes and
    merged back into source order.
    """

    QUERY_TAG = 'queryParam'
    PATH_TAG = 'pathParam'
    EXAMPLE_TAG = 'example'

    # Bare words accepted as a type in "@queryParam name <type> ..."
    KNOWN_TYPE_WORDS = {
        'int', 'integer', 'int32', 'int64', 'long',
        'float', 'double', 'number', 'decimal',
        'bool', 'boolean',
        'string', 'str',
        'array', 'list', 'object', 'dict', 'mixed',
        'date', 'datetime', 'uuid', 'null', 'none',
    }

    # Class-like type names accepted with their capitalisation
    KNOWN_CLASS_TYPES = {'DateTime', 'DateTimeImmutable', 'DateTimeInterface', 'Carbon', 'CarbonImmutable'}

    @staticmethod
    def parse(raw_text: Optional[str]) -> AnnotationBlock:
        """
        Parse every supported directive in a comment block.

        Args:
            raw_text: Raw comment text (None allowed)

        Returns:
            AnnotationBlock with query directives, examples and path names
        """
        block = AnnotationBlock()
        if not raw_text:
            return block

        segments = AnnotationBlockParser._segments(AnnotationBlockParser._strip_comment(raw_text))

        for tag, _offset, body in segments:
            if tag == AnnotationBlockParser.EXAMPLE_TAG:
                parsed = AnnotationBlockParser._parse_named_value(body)
                if parsed and parsed[1] and parsed[0] not in block.examples:
                    block.examples[parsed[0]] = parsed[1]
            elif tag == AnnotationBlockParser.PATH_TAG:
                parsed = AnnotationBlockParser._parse_named_value(body)
                if parsed and parsed[0] not in block.path_parameters:
                    block.path_parameters.append(parsed[0])

        directives = AnnotationBlockParser._merge_passes(
            AnnotationBlockParser._scan_bare_form(segments),
            AnnotationBlockParser._scan_braced_form(segments),
        )

        for directive in directives:
            if directive.raw_example is None and directive.name in block.examples:
                directive = RawDirective(
                    name=directive.name,
                    raw_type=directive.raw_type,
                    raw_description=directive.raw_description,
                    raw_example=block.examples[directive.name],
                    required=directive.required,
                )
            block.directives.append(directive)

        logger.debug(
            f"Parsed {len(block.directives)} query directives, "
            f"{len(block.examples)} examples, {len(block.path_parameters)} path params"
        )
        return block

    @staticmethod
    def parse_directives(raw_text: Optional[str]) -> List[RawDirective]:
        """Only the ``@queryParam`` records of a comment block, in source order."""
        return AnnotationBlockParser.parse(raw_text).directives

    @staticmethod
    def _strip_comment(raw_text: str) -> str:
        """Remove comment delimiters and leading ``*``/``//``/``#`` decoration."""
        lines = []
        for line in raw_text.splitlines():
            line = COMMENT_DECORATION.sub('', line, count=1)
            if line.rstrip().endswith('*/'):
                line = line.rstrip()[:-2]
            lines.append(line)
        return '\n'.join(lines)

    @staticmethod
    def _segments(text: str) -> List[Tuple[str, int, str]]:
        """
        Split text into (tag, offset, body) directive segments.

        Bodies run to the next directive marker or the end of the text.
        """
        markers = list(DIRECTIVE_PATTERN.finditer(text))
        segments = []

        for i, marker in enumerate(markers):
            end = markers[i + 1].start() if i + 1 < len(markers) else len(text)
            segments.append((marker.group(1), marker.start(), text[marker.end():end]))

        return segments

    @staticmethod
    def _scan_bare_form(segments: List[Tuple[str, int, str]]) -> List[Tuple[int, RawDirective]]:
        """Pass over ``@queryParam name [type] description`` directives."""
        found = []

        for tag, offset, body in segments:
            if tag != AnnotationBlockParser.QUERY_TAG:
                continue

            # Body must be separated from the tag by whitespace
            if not body[:1].isspace():
                continue

            match = BARE_FORM.match(body.strip())
            if not match:
                continue

            name, rest = match.group(1), match.group(2)
            if rest and not rest[:1].isspace():
                continue

            raw_type = None
            words = rest.split(None, 1)
            if words and AnnotationBlockParser._looks_like_type(words[0]):
                raw_type = words[0]
                rest = words[1] if len(words) > 1 else ""

            found.append((offset, AnnotationBlockParser._build_directive(name, raw_type, rest)))

        return found

    @staticmethod
    def _scan_braced_form(segments: List[Tuple[str, int, str]]) -> List[Tuple[int, RawDirective]]:
        """Pass over ``@queryParam {type} name description`` directives."""
        found = []

        for tag, offset, body in segments:
            if tag != AnnotationBlockParser.QUERY_TAG:
                continue

            match = BRACED_FORM.match(body.strip())
            if not match or not match.group(2):
                continue

            type_info, name, rest = match.group(1), match.group(2), match.group(3)
            raw_type, brace_optional = AnnotationBlockParser._split_type_info(type_info)

            directive = AnnotationBlockParser._build_directive(name, raw_type, rest)
            if brace_optional and directive.required:
                directive = RawDirective(
                    name=directive.name,
                    raw_type=directive.raw_type,
                    raw_description=directive.raw_description,
                    raw_example=directive.raw_example,
                    required=False,
                )

            found.append((offset, directive))

        return found

    @staticmethod
    def _merge_passes(*passes: List[Tuple[int, RawDirective]]) -> List[RawDirective]:
        merged = [item for found in passes for item in found]
        merged.sort(key=lambda item: item[0])
        return [directive for _offset, directive in merged]

    @staticmethod
    def _build_directive(name: str, raw_type: Optional[str], text: str) -> RawDirective:
        description, example = AnnotationBlockParser._split_inline_example(text)

        return RawDirective(
            name=name,
            raw_type=raw_type or None,
            raw_description=description,
            raw_example=example,
            required='optional' not in description.lower(),
        )

    @staticmethod
    def _split_inline_example(text: str) -> Tuple[str, Optional[str]]:
        """
        Separate an inline ``Example: <value>`` fragment from a description.

        Example:
            >>> AnnotationBlockParser._split_inline_example("Page number. Example: 3")
            ('Page number.', '3')
        """
        collapsed = ' '.join(text.split())
        match = INLINE_EXAMPLE.search(collapsed)
        if not match:
            return collapsed, None

        description = collapsed[:match.start()].strip()
        example = collapsed[match.end():].strip()
        return description, (example or None)

    @staticmethod
    def _split_type_info(type_info: str) -> Tuple[Optional[str], bool]:
        """
        Split brace contents such as ``int, optional`` into (type, optional).
        """
        parts = [p for p in re.split(r'[,\s]+', type_info.strip()) if p]
        optional = any(p.lower() == 'optional' for p in parts)
        type_parts = [p for p in parts if p.lower() not in ('optional', 'required')]
        return (type_parts[0] if type_parts else None), optional

    @staticmethod
    def _looks_like_type(word: str) -> bool:
        """
        Decide whether the word after a parameter name is a type token.

        Unions (``string|array``) always are; otherwise every alternative must
        be a known type word, so "status Filter by status" keeps "Filter" in
        the description.
        """
        if not TYPE_WORD.match(word):
            return False

        alternatives = [alt for alt in word.split('|') if alt]
        if not alternatives:
            return False
        if len(alternatives) > 1:
            return True

        candidate = alternatives[0].lstrip('?').lstrip('\\')
        if candidate.endswith('[]'):
            candidate = candidate[:-2]
        candidate = candidate.split('\\')[-1]

        return (candidate in AnnotationBlockParser.KNOWN_TYPE_WORDS
                or candidate in AnnotationBlockParser.KNOWN_CLASS_TYPES)

    @staticmethod
    def _parse_named_value(body: str) -> Optional[Tuple[str, str]]:
        """Parse ``name value...`` bodies of ``@example`` and ``@pathParam``."""
        if not body[:1].isspace():
            return None

        match = NAMED_VALUE.match(body.strip())
        if not match:
            return None

        rest = match.group(2)
        if rest and not rest[:1].isspace():
            return None

        return match.group(1), ' '.join(rest.split())
