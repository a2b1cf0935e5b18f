import pytest

from extraction.deterministic.type_inference import TypeInference


class TestCanonicalWireType:
    @pytest.mark.parametrize("token,expected", [
        ("int", "integer"),
        ("integer", "integer"),
        ("int64", "integer"),
        ("?int", "integer"),
        ("bool", "boolean"),
        ("Boolean", "boolean"),
        ("float", "number"),
        ("double", "number"),
        ("number", "number"),
        ("array", "array"),
        ("object", "object"),
        ("string", "string"),
        ("custom", "string"),
        ("", "string"),
        (None, "string"),
    ])
    def test_maps_tokens(self, token, expected):
        assert TypeInference.canonical_wire_type(token) == expected

    def test_union_uses_first_alternative(self):
        assert TypeInference.canonical_wire_type("int|string") == "integer"
        assert TypeInference.canonical_wire_type("string|array") == "string"

    def test_namespaced_class_is_string(self):
        assert TypeInference.canonical_wire_type("\\Carbon\\Carbon") == "string"


class TestInferFormat:
    def test_integer_defaults_to_int32(self):
        assert TypeInference.infer_format("int", "page") == "int32"

    def test_integer_id_names_are_int64(self):
        assert TypeInference.infer_format("integer", "userId") == "int64"

    def test_explicit_int64_token_widens_any_name(self):
        assert TypeInference.infer_format("int64", "count") == "int64"
        assert TypeInference.infer_format("?int64", "offset") == "int64"
        assert TypeInference.infer_format("int", "count") == "int32"

    def test_float_format(self):
        assert TypeInference.infer_format("float", "price") == "float"
        assert TypeInference.infer_format("double", "ratio") == "float"

    def test_date_time_types(self):
        assert TypeInference.infer_format("DateTime", "since") == "date-time"
        assert TypeInference.infer_format("\\DateTimeImmutable", "since") == "date-time"

    @pytest.mark.parametrize("name,expected", [
        ("createdAt", "date-time"),
        ("created_date", "date-time"),
        ("updated_at", "date-time"),
        ("start_time", "date-time"),
        ("userEmail", "email"),
        ("password", "password"),
        ("apiUrl", "uri"),
        ("redirect_uri", "uri"),
        ("request_uuid", "uuid"),
        ("client_ip", "ipv4"),
    ])
    def test_string_name_heuristics(self, name, expected):
        assert TypeInference.infer_format("string", name) == expected

    def test_untyped_parameters_use_name_heuristics(self):
        assert TypeInference.infer_format(None, "userEmail") == "email"
        assert TypeInference.infer_format("", "apiUrl") == "uri"

    def test_string_id_name_gets_no_format(self):
        assert TypeInference.infer_format("string", "userId") is None

    def test_no_match_returns_none(self):
        assert TypeInference.infer_format("string", "search") is None
        assert TypeInference.infer_format("bool", "active") is None
        assert TypeInference.infer_format("array", "created_at") is None


class TestExampleInference:
    @pytest.mark.parametrize("value,expected", [
        ("123", "integer"),
        ("-7", "integer"),
        ("123.45", "number"),
        ("true", "boolean"),
        ("FALSE", "boolean"),
        ("some string", "string"),
        ("12abc", "string"),
    ])
    def test_example_type(self, value, expected):
        assert TypeInference.infer_example_type(value) == expected

    @pytest.mark.parametrize("value,expected", [
        ("test@example.com", "email"),
        ("2021-01-01", "date"),
        ("2021-01-01T12:00:00Z", "date-time"),
        ("2021-01-01T12:00:00.123+02:00", "date-time"),
        ("https://example.com/path", "uri"),
        ("192.168.0.1", "ipv4"),
        ("::1", "ipv6"),
        ("normal string", None),
        ("3", None),
    ])
    def test_example_format(self, value, expected):
        assert TypeInference.infer_example_format(value) == expected
