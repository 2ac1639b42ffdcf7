"""🧪 Tests for example YAML synthesis."""

import pytest
import yaml

from crddoc.docs.examples import (
    DEFAULT_WORDS,
    AnnotationValueLoader,
    ExampleSynthesizer,
    WordCycle,
    build_example_yaml,
    parse_annotation_value,
)
from crddoc.docs.models import (
    CustomResource,
    DocumentationBlock,
    Field,
    GroupVersion,
    Scope,
    SubObject,
)
from crddoc.docs.types import Mapping, Named, Qualified, Sequence


def field(name, type_ref, **annotations):
    if isinstance(type_ref, str):
        type_ref = Named(type_ref)
    return Field(
        name=name,
        type_ref=type_ref,
        doc=DocumentationBlock(annotations=dict(annotations)),
    )


def make_cr(*fields, scope=Scope.NAMESPACED, group="example.com"):
    return CustomResource(
        group_version_kind=GroupVersion(group, "v1").with_kind("Thing"),
        scope=scope,
        fields=list(fields),
    )


class TestWordCycle:
    """Tests for WordCycle class."""

    def test_words_in_order(self):
        cycle = WordCycle()

        assert [cycle.next() for _ in range(3)] == ["lorem", "ipsum", "dolor"]

    def test_wraps_after_last_word(self):
        cycle = WordCycle(["a", "b"])

        assert [cycle.next() for _ in range(5)] == ["a", "b", "a", "b", "a"]

    def test_seeded_start(self):
        cycle = WordCycle(start=len(DEFAULT_WORDS) - 1)

        assert cycle.next() == "tempor"
        assert cycle.next() == "lorem"

    def test_empty_word_list_rejected(self):
        with pytest.raises(ValueError):
            WordCycle([])


class TestParseAnnotationValue:
    """Tests for YAML annotation values."""

    def test_structured_value(self):
        assert parse_annotation_value("{a: 1, b: [x, y]}") == {"a": 1, "b": ["x", "y"]}

    def test_quoted_string(self):
        assert parse_annotation_value('"Test 123"') == "Test 123"

    def test_invalid_yaml_falls_back_to_raw(self):
        assert parse_annotation_value("{a: [1, 2") == "{a: [1, 2"

    def test_timestamp_stays_string(self):
        assert parse_annotation_value("2024-01-01T00:00:00Z") == "2024-01-01T00:00:00Z"
        assert parse_annotation_value("{since: 2024-01-01}") == {"since": "2024-01-01"}


class TestExampleSynthesizer:
    """Tests for ExampleSynthesizer class."""

    @pytest.fixture
    def sub_objects(self):
        return [
            SubObject(
                name="Spec",
                fields=[field("size", "int64"), field("name", "string"), field("on", "bool")],
            ),
            SubObject(name="Node", fields=[field("value", "string"), field("next", "Node")]),
        ]

    def test_placeholders(self, sub_objects):
        synthesizer = ExampleSynthesizer(sub_objects)

        value = synthesizer.example_object(
            [field("count", "int32"), field("label", "string"), field("enabled", "bool")]
        )

        assert value == {"count": 42, "label": "lorem", "enabled": True}

    def test_example_annotation_wins(self, sub_objects):
        synthesizer = ExampleSynthesizer(sub_objects)

        value = synthesizer.field_value(
            Named("string"), {"example": "custom", "kubebuilder:default": "other"}
        )

        assert value == "custom"

    def test_default_annotation(self, sub_objects):
        synthesizer = ExampleSynthesizer(sub_objects)

        assert synthesizer.field_value(Named("int32"), {"kubebuilder:default": "3"}) == 3

    def test_annotation_before_sequence(self, sub_objects):
        """Test that an example on a list field is used as the whole value."""
        synthesizer = ExampleSynthesizer(sub_objects)

        value = synthesizer.field_value(Sequence(Named("string")), {"example": "[a, b]"})

        assert value == ["a", "b"]

    def test_sequence_has_one_element(self, sub_objects):
        synthesizer = ExampleSynthesizer(sub_objects)

        value = synthesizer.field_value(Sequence(Named("Spec")), {})

        assert value == [{"size": 42, "name": "lorem", "on": True}]

    def test_invalid_example_used_verbatim(self, sub_objects):
        synthesizer = ExampleSynthesizer(sub_objects)

        assert synthesizer.field_value(Named("Spec"), {"example": "{broken: ["}) == "{broken: ["

    def test_unknown_types_are_empty_mappings(self, sub_objects):
        synthesizer = ExampleSynthesizer(sub_objects)

        assert synthesizer.field_value(Named("float64"), {}) == {}
        assert synthesizer.field_value(Named("Missing"), {}) == {}
        assert synthesizer.field_value(Qualified("types", "UID"), {}) == {}
        assert synthesizer.field_value(Mapping(Named("string"), Named("string")), {}) == {}

    def test_self_reference_terminates(self, sub_objects):
        synthesizer = ExampleSynthesizer(sub_objects)

        value = synthesizer.field_value(Named("Node"), {})

        assert value == {"value": "lorem", "next": {}}

    def test_words_shared_across_resources(self, sub_objects):
        """Test that one synthesizer keeps counting across resources."""
        synthesizer = ExampleSynthesizer(sub_objects)

        first = synthesizer.example_document(make_cr(field("a", "string")))
        second = synthesizer.example_document(make_cr(field("a", "string")))

        assert first["a"] == "lorem"
        assert second["a"] == "ipsum"

    def test_words_wrap(self):
        synthesizer = ExampleSynthesizer([])
        fields = [field(f"f{i}", "string") for i in range(len(DEFAULT_WORDS) + 1)]

        value = synthesizer.example_object(fields)

        assert list(value.values())[: len(DEFAULT_WORDS)] == list(DEFAULT_WORDS)
        assert value[f"f{len(DEFAULT_WORDS)}"] == "lorem"

    def test_separate_synthesizers_do_not_share_words(self, sub_objects):
        cr = make_cr(field("a", "string"))

        assert build_example_yaml(cr, sub_objects) == build_example_yaml(cr, sub_objects)


class TestExampleYaml:
    """Tests for the rendered example document."""

    def test_envelope_namespaced(self):
        text = ExampleSynthesizer([]).example_yaml(make_cr(field("size", "int32")))

        document = yaml.safe_load(text)
        assert document == {
            "apiVersion": "example.com/v1",
            "kind": "Thing",
            "metadata": {"name": "example", "namespace": "default"},
            "size": 42,
        }

    def test_cluster_scope_has_no_namespace(self):
        text = ExampleSynthesizer([]).example_yaml(
            make_cr(field("size", "int32"), scope=Scope.CLUSTER)
        )

        assert yaml.safe_load(text)["metadata"] == {"name": "example"}

    def test_api_version_without_group(self):
        text = ExampleSynthesizer([]).example_yaml(make_cr(group=""))

        assert yaml.safe_load(text)["apiVersion"] == "v1"

    def test_block_style_sorted_keys(self):
        text = ExampleSynthesizer([]).example_yaml(
            make_cr(field("zeta", "int32"), field("alpha", Sequence(Named("int32"))))
        )

        assert text.splitlines() == [
            "alpha:",
            "- 42",
            "apiVersion: example.com/v1",
            "kind: Thing",
            "metadata:",
            "  name: example",
            "  namespace: default",
            "zeta: 42",
        ]

    def test_round_trip_keys(self):
        """Test that the example holds envelope keys plus one key per field."""
        cr = make_cr(field("spec", "string"), field("status", "bool"), field("count", "int8"))

        document = yaml.safe_load(ExampleSynthesizer([]).example_yaml(cr))

        assert set(document) == {"kind", "apiVersion", "metadata", "spec", "status", "count"}

    def test_non_ascii_written_as_is(self):
        text = ExampleSynthesizer([]).example_yaml(
            make_cr(field("greeting", "string", example="héllo wörld"))
        )

        assert "greeting: héllo wörld" in text.splitlines()

    def test_timestamp_example_round_trip(self):
        text = ExampleSynthesizer([]).example_yaml(
            make_cr(field("since", "metav1.Time", example="2024-01-01T00:00:00Z"))
        )

        assert "since: '2024-01-01T00:00:00Z'" in text.splitlines()
        assert yaml.load(text, Loader=AnnotationValueLoader)["since"] == "2024-01-01T00:00:00Z"
