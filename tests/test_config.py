import json

import pytest

from extraction import ExtractionError, ExtractorConfig, setup_logging


class TestExtractorConfig:
    def test_defaults(self):
        config = ExtractorConfig()
        assert config.request_type_marker == "Request"
        assert {"int", "string", "bool", "float"} <= config.primitive_types
        assert config.query_methods == {"GET", "HEAD"}
        assert config.resource_binding_types == set()

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("EXTRACTOR_RESOURCE_BINDING_TYPES", "User, Post")
        monkeypatch.setenv("EXTRACTOR_QUERY_METHODS", "get,options")
        monkeypatch.setenv("EXTRACTOR_CACHE", "true")
        monkeypatch.delenv("EXTRACTOR_PRIMITIVE_TYPES", raising=False)

        config = ExtractorConfig.from_env()
        assert config.resource_binding_types == {"User", "Post"}
        assert config.query_methods == {"GET", "OPTIONS"}
        assert config.cache_enabled is True
        assert "int" in config.primitive_types

    def test_from_yaml_file(self, tmp_path):
        path = tmp_path / "extractor.yaml"
        path.write_text("resource_binding_types:\n  - User\nquery_methods:\n  - get\n", encoding="utf-8")

        config = ExtractorConfig.from_file(str(path))
        assert config.resource_binding_types == {"User"}
        assert config.query_methods == {"GET"}

    def test_from_json_file(self, tmp_path):
        path = tmp_path / "extractor.json"
        path.write_text(json.dumps({"request_type_marker": "Envelope", "cache_enabled": True}), encoding="utf-8")

        config = ExtractorConfig.from_file(str(path))
        assert config.request_type_marker == "Envelope"
        assert config.to_dict()["cache_enabled"] is True

    def test_unsupported_file_type(self, tmp_path):
        with pytest.raises(ExtractionError):
            ExtractorConfig.from_file(str(tmp_path / "extractor.toml"))


class TestSetupLogging:
    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "extractor.log"
        logger = setup_logging("debug", str(log_file))

        assert logger.name == "query_extractor"
        assert len(logger.handlers) == 2
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
