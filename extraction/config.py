"""
Extractor configuration.

Can be loaded from environment variables (``.env`` honoured), a JSON/YAML
file, or built directly.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Set

import yaml
from dotenv import load_dotenv

from .base import ExtractionError
from .deterministic.signature_introspector import DEFAULT_PRIMITIVE_TYPES

_SET_FIELDS = ("primitive_types", "resource_binding_types", "query_methods")


def _split_list(value: Optional[str]) -> Set[str]:
    if not value:
        return set()
    return {item.strip() for item in value.split(",") if item.strip()}


@dataclass
class ExtractorConfig:
    """Extractor settings with sensible defaults."""
    # Signature classification
    request_type_marker: str = "Request"
    primitive_types: Set[str] = field(default_factory=lambda: set(DEFAULT_PRIMITIVE_TYPES))
    resource_binding_types: Set[str] = field(default_factory=set)

    # Only these HTTP methods get query parameters when a method is given
    query_methods: Set[str] = field(default_factory=lambda: {"GET", "HEAD"})

    cache_enabled: bool = False
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def __post_init__(self):
        self.query_methods = {m.upper() for m in self.query_methods}

    @classmethod
    def from_env(cls) -> "ExtractorConfig":
        """Load configuration from environment variables."""
        load_dotenv()
        defaults = cls()
        return cls(
            request_type_marker=os.getenv("EXTRACTOR_REQUEST_TYPE_MARKER", defaults.request_type_marker),
            primitive_types=_split_list(os.getenv("EXTRACTOR_PRIMITIVE_TYPES")) or defaults.primitive_types,
            resource_binding_types=_split_list(os.getenv("EXTRACTOR_RESOURCE_BINDING_TYPES")),
            query_methods=_split_list(os.getenv("EXTRACTOR_QUERY_METHODS")) or defaults.query_methods,
            cache_enabled=os.getenv("EXTRACTOR_CACHE", "false").lower() == "true",
            log_level=os.getenv("EXTRACTOR_LOG_LEVEL", "INFO"),
            log_file=os.getenv("EXTRACTOR_LOG_FILE"),
        )

    @classmethod
    def from_file(cls, path: str) -> "ExtractorConfig":
        """Load configuration from a JSON or YAML file."""
        if not path.endswith((".json", ".yaml", ".yml")):
            raise ExtractionError(f"Unsupported config file type: {path}")

        with open(path, "r", encoding="utf-8") as f:
            if path.endswith((".yaml", ".yml")):
                data = yaml.safe_load(f) or {}
            else:
                data = json.load(f)

        for key in _SET_FIELDS:
            if key in data and isinstance(data[key], list):
                data[key] = set(data[key])

        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "request_type_marker": self.request_type_marker,
            "primitive_types": sorted(self.primitive_types),
            "resource_binding_types": sorted(self.resource_binding_types),
            "query_methods": sorted(self.query_methods),
            "cache_enabled": self.cache_enabled,
            "log_level": self.log_level,
            "log_file": self.log_file,
        }
