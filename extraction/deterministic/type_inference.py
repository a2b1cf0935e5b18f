#!/usr/bin/env python3
"""
Type / Format Inference
========================
Map free-form documentation type words and parameter names to OpenAPI
wire types and formats.

Both signature-declared tokens (``int``, ``?string``, ``Optional[int]``) and
annotation tokens (``int|string``, ``{bool}``) go through the same rules:

- Type: ordered substring matching on the first union alternative
- Format: type-based rules first, then name heuristics for strings
- Examples: literal sample values are classified on their own

All functions are pure.
"""

import ipaddress
import logging
import re
from typing import Optional
from urllib.parse import urlparse

from ..base import WireType

logger = logging.getLogger("query_extractor.deterministic.type_inference")


class TypeInference:
    """
    Heuristic type/format inference for query parameters.

    The type mapping is deliberately lossy: documentation authors use
    free-form words, so anything unknown becomes a string.
    """

    # Exact words honoured after the substring categories
    TYPE_ALIASES = {
        'integer': WireType.INTEGER.value,
        'number': WireType.NUMBER.value,
        'boolean': WireType.BOOLEAN.value,
        'array': WireType.ARRAY.value,
        'object': WireType.OBJECT.value,
    }

    # Declared types that carry a timestamp
    DATE_TIME_TYPES = {
        'datetime',
        'datetimeimmutable',
        'datetimeinterface',
        'carbon',
        'carbonimmutable',
        'timestamp',
    }

    # Name heuristics for string parameters, checked in order
    NAME_FORMAT_RULES = [
        (re.compile(r'date|time|(?:created|updated|deleted)_?at'), 'date-time'),
        (re.compile(r'email'), 'email'),
        (re.compile(r'password'), 'password'),
        (re.compile(r'ur[li]'), 'uri'),
        (re.compile(r'uuid'), 'uuid'),
        (re.compile(r'ip'), 'ipv4'),
    ]

    NUMERIC_PATTERN = re.compile(r'^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$')
    EMAIL_PATTERN = re.compile(
        r"^[A-Za-z0-9.!#$%&'*+/=?^_`{|}~-]+@[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?"
        r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?)+$"
    )
    DATE_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')
    DATE_TIME_PATTERN = re.compile(
        r'^\d{4}-\d{2}-\d{2}[Tt ]\d{2}:\d{2}:\d{2}(?:\.\d+)?(?:[Zz]|[+-]\d{2}:\d{2})?$'
    )

    @staticmethod
    def first_alternative(token: Optional[str]) -> str:
        """
        Reduce a raw type token to its canonical first alternative.

        Examples:
            - "int|string" → "int"
            - "?string" → "string"
            - "\\Carbon\\Carbon" → "Carbon"
            - None → ""
        """
        if not token:
            return ""

        first = token.split('|', 1)[0].strip()
        first = first.lstrip('?').strip()

        # Drop namespaces (PHP "\App\Foo", Python "datetime.datetime")
        first = re.split(r'[\\.]', first)[-1] if first else first

        return first

    @staticmethod
    def canonical_wire_type(token: Optional[str]) -> str:
        """
        Map a raw type token to a wire type.

        Rules (first match wins, on the lower-cased first alternative):
            - contains "int" → integer
            - contains "bool" → boolean
            - contains "float" or "double" → number
            - contains "array" → array
            - exact alias (integer, number, boolean, array, object)
            - anything else, including empty → string
        """
        word = TypeInference.first_alternative(token).lower()

        if not word:
            return WireType.STRING.value

        if 'int' in word:
            return WireType.INTEGER.value
        if 'bool' in word:
            return WireType.BOOLEAN.value
        if 'float' in word or 'double' in word:
            return WireType.NUMBER.value
        if 'array' in word:
            return WireType.ARRAY.value

        return TypeInference.TYPE_ALIASES.get(word, WireType.STRING.value)

    @staticmethod
    def is_date_time_type(token: Optional[str]) -> bool:
        return TypeInference.first_alternative(token).lower() in TypeInference.DATE_TIME_TYPES

    @staticmethod
    def infer_format(token: Optional[str], param_name: str = "") -> Optional[str]:
        """
        Infer an OpenAPI format from the type token, then from the name.

        Args:
            token: Raw type token (may be empty)
            param_name: Parameter name used for the name heuristics

        Returns:
            Format string or None

        Example:
            >>> TypeInference.infer_format("int", "userId")
            'int64'
            >>> TypeInference.infer_format("", "apiUrl")
            'uri'
        """
        wire_type = TypeInference.canonical_wire_type(token)
        name_lower = (param_name or "").lower()

        # Type-based rules
        if wire_type == WireType.INTEGER.value:
            # An explicit 64-bit token (int64) also widens, whatever the name
            if 'id' in name_lower or '64' in TypeInference.first_alternative(token):
                return 'int64'
            return 'int32'

        if wire_type == WireType.NUMBER.value:
            return 'float'

        if TypeInference.is_date_time_type(token):
            return 'date-time'

        if wire_type != WireType.STRING.value:
            return None

        # Name-based heuristics (strings only)
        for pattern, fmt in TypeInference.NAME_FORMAT_RULES:
            if pattern.search(name_lower):
                logger.debug(f"Format '{fmt}' inferred from name '{param_name}'")
                return fmt

        return None

    @staticmethod
    def infer_example_type(value: str) -> str:
        """
        Classify a literal example value.

        - "3" → integer
        - "3.5" → number
        - "TRUE" → boolean
        - anything else → string
        """
        text = value.strip()

        if TypeInference.NUMERIC_PATTERN.match(text):
            if '.' in text:
                return WireType.NUMBER.value
            return WireType.INTEGER.value

        if text.lower() in ('true', 'false'):
            return WireType.BOOLEAN.value

        return WireType.STRING.value

    @staticmethod
    def infer_example_format(value: str) -> Optional[str]:
        """
        Detect the format of a literal example value.

        Tried in order: email, date, date-time, URL, IP address.
        """
        text = value.strip()

        if TypeInference.EMAIL_PATTERN.match(text):
            return 'email'

        if TypeInference.DATE_PATTERN.match(text):
            return 'date'

        if TypeInference.DATE_TIME_PATTERN.match(text):
            return 'date-time'

        if TypeInference._is_url(text):
            return 'uri'

        return TypeInference._ip_format(text)

    @staticmethod
    def _is_url(text: str) -> bool:
        if not text or any(ch.isspace() for ch in text):
            return False
        try:
            parsed = urlparse(text)
        except ValueError:
            return False
        return bool(parsed.scheme) and bool(parsed.netloc) and parsed.scheme.isalpha()

    @staticmethod
    def _ip_format(text: str) -> Optional[str]:
        try:
            address = ipaddress.ip_address(text)
        except ValueError:
            return None
        return 'ipv4' if address.version == 4 else 'ipv6'
