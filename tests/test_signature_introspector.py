from extraction.base import Origin, ParameterDescriptor
from extraction.deterministic.annotation_parser import AnnotationBlockParser
from extraction.deterministic.signature_introspector import SignatureIntrospector


def _names(params):
    return [p.name for p in params]


class TestClassify:
    def setup_method(self):
        self.introspector = SignatureIntrospector(resource_binding_types={"App\\Models\\User", "Post"})

    def test_primitives_are_query_parameters(self):
        params = [
            ParameterDescriptor("page", "int"),
            ParameterDescriptor("q", "string", optional=True),
            ParameterDescriptor("ratio", "float"),
            ParameterDescriptor("active", "bool"),
        ]
        assert _names(self.introspector.classify(params, None, set())) == ["page", "q", "ratio", "active"]

    def test_request_envelope_excluded(self):
        params = [ParameterDescriptor("request", "Illuminate\\Http\\Request"),
                  ParameterDescriptor("form", "StoreUserRequest")]
        assert self.introspector.classify(params, "@queryParam request", set()) == []

    def test_resource_binding_excluded(self):
        params = [ParameterDescriptor("user", "User"), ParameterDescriptor("post", "\\App\\Post")]
        assert self.introspector.classify(params, "@queryParam user The user", set()) == []

    def test_path_parameters_excluded(self):
        params = [ParameterDescriptor("id", "int"), ParameterDescriptor("page", "int")]
        assert _names(self.introspector.classify(params, None, {"id"})) == ["page"]

    def test_query_param_tag_includes_non_primitive(self):
        params = [ParameterDescriptor("since", "Carbon"), ParameterDescriptor("until", "Carbon")]
        text = "@queryParam since Lower bound\n@queryParam {string} until Upper bound"
        assert _names(self.introspector.classify(params, text, set())) == ["since", "until"]

    def test_non_primitive_without_tag_excluded(self):
        params = [ParameterDescriptor("filters", "FilterSet"), ParameterDescriptor("untyped", None)]
        assert self.introspector.classify(params, None, set()) == []

    def test_path_param_tag_excludes_primitive(self):
        params = [ParameterDescriptor("slug", "string"), ParameterDescriptor("slugs", "string")]
        assert _names(self.introspector.classify(params, "@pathParam slug", set())) == ["slugs"]

    def test_nullable_and_union_tokens(self):
        params = [ParameterDescriptor("a", "?int"), ParameterDescriptor("b", "int|None")]
        assert _names(self.introspector.classify(params, None, set())) == ["a", "b"]

    def test_origin_is_signature(self):
        params = [ParameterDescriptor("page", "int", origin=Origin.ANNOTATION)]
        result = self.introspector.classify(params, None, set())
        assert result[0].origin is Origin.SIGNATURE
        assert result[0].declared_type == "int"

    def test_excluded_bindings(self):
        params = [
            ParameterDescriptor("request", "Request"),
            ParameterDescriptor("user", "User"),
            ParameterDescriptor("page", "int"),
        ]
        assert self.introspector.excluded_bindings(params) == {"request", "user"}

    def test_tag_must_start_a_word(self):
        params = [ParameterDescriptor("since", "Carbon"), ParameterDescriptor("slug", "string")]
        text = "Contact admin@queryParam since, or admin@pathParam slug"
        assert _names(self.introspector.classify(params, text, set())) == ["slug"]

    def test_braced_path_param_tag(self):
        params = [ParameterDescriptor("slug", "string"), ParameterDescriptor("page", "int")]
        text = "@pathParam {string} slug The post slug"
        assert _names(self.introspector.classify(params, text, set())) == ["page"]

    def test_parsed_block_is_used(self):
        params = [ParameterDescriptor("slug", "string"), ParameterDescriptor("since", "Carbon")]
        block = AnnotationBlockParser.parse("@pathParam slug\n@queryParam since Lower bound")
        assert _names(self.introspector.classify(params, None, set(), block=block)) == ["since"]
