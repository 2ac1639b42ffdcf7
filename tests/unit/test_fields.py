"""🧪 Tests for the struct field extractor."""

import pytest

from crddoc.docs.parsers.fields import FieldExtractor, JSONTag, StructTag
from crddoc.docs.types import Mapping, Named, Qualified, Sequence, normalize_type
from crddoc.exceptions import FieldExtractionError, MissingTagError, UnsupportedTypeError
from crddoc.source.declarations import (
    ArrayType,
    DeclaredField,
    DeclaredType,
    Ident,
    MapType,
    Selector,
    Star,
    UnsupportedExpr,
)


class TestNormalizeType:
    """Tests for type expression normalization."""

    def test_ident(self):
        assert str(normalize_type(Ident("string"))) == "string"

    def test_pointer_is_transparent(self):
        """Test that *T and **T normalize like T."""
        assert normalize_type(Star(Ident("int32"))) == Named("int32")
        assert normalize_type(Star(Star(Ident("Foo")))) == Named("Foo")

    def test_selector(self):
        ref = normalize_type(Selector("metav1", "ObjectMeta"))

        assert ref == Qualified("metav1", "ObjectMeta")
        assert str(ref) == "metav1.ObjectMeta"

    def test_nested_sequences(self):
        ref = normalize_type(ArrayType(ArrayType(Star(Ident("Foo")))))

        assert ref == Sequence(Sequence(Named("Foo")))
        assert str(ref) == "[][]Foo"
        assert ref.referenced_name() == "Foo"

    def test_map(self):
        ref = normalize_type(MapType(Ident("string"), ArrayType(Ident("Bar"))))

        assert isinstance(ref, Mapping)
        assert str(ref) == "map[string][]Bar"
        assert ref.referenced_name() == "Bar"

    def test_unsupported_shape_raises(self):
        with pytest.raises(UnsupportedTypeError):
            normalize_type(UnsupportedExpr("func"))


class TestStructTag:
    """Tests for struct tag parsing."""

    def test_get_json(self):
        tag = StructTag.parse('json:"spec,omitempty" yaml:"spec"')

        assert tag.get("json") == "spec,omitempty"
        assert tag.get("yaml") == "spec"
        assert tag.get("protobuf") == ""

    def test_missing_tag(self):
        assert StructTag.parse(None).get("json") == ""

    def test_json_options(self):
        tag = JSONTag.parse(",inline")

        assert tag.name == ""
        assert tag.is_inline
        assert not tag.omit_empty


class TestFieldExtractor:
    """Tests for FieldExtractor class."""

    @pytest.fixture
    def extractor(self):
        return FieldExtractor()

    def _type(self, *fields):
        return DeclaredType(name="Thing", fields=list(fields))

    def test_tag_name_is_external_name(self, extractor):
        result = extractor.extract(
            self._type(DeclaredField(Ident("string"), "DisplayName", 'json:"displayName"'))
        )

        assert [f.name for f in result.fields] == ["displayName"]
        assert result.fields[0].type == "string"

    def test_identifier_used_without_tag_name(self, extractor):
        """Test that an empty json name falls back to the identifier."""
        result = extractor.extract(
            self._type(DeclaredField(Ident("string"), "Value", 'json:",omitempty"'))
        )

        assert result.fields[0].name == "Value"

    def test_required_flag(self, extractor):
        """Test that omitempty makes a field optional."""
        result = extractor.extract(
            self._type(
                DeclaredField(Ident("string"), "A", 'json:"a,omitempty"'),
                DeclaredField(Ident("string"), "B", 'json:"b"'),
            )
        )

        assert result.fields[0].is_required is False
        assert result.fields[1].is_required is True

    def test_excluded_field_dropped(self, extractor):
        result = extractor.extract(
            self._type(
                DeclaredField(Ident("string"), "Secret", 'json:"-"'),
                DeclaredField(Ident("string"), "Name", 'json:"name"'),
            )
        )

        assert [f.name for f in result.fields] == ["name"]

    def test_inline_field_recorded_as_embedded(self, extractor):
        """Test that inline fields produce no field, only an embedded name."""
        result = extractor.extract(
            self._type(
                DeclaredField(Selector("metav1", "TypeMeta"), None, 'json:",inline"'),
                DeclaredField(Star(Ident("Common")), None, 'json:",inline"'),
                DeclaredField(Ident("string"), "Name", 'json:"name"'),
            )
        )

        assert result.embedded == ["metav1.TypeMeta", "Common"]
        assert [f.name for f in result.fields] == ["name"]

    def test_embedded_without_inline_uses_type_name(self, extractor):
        result = extractor.extract(
            self._type(DeclaredField(Selector("metav1", "ObjectMeta"), None, 'json:",omitempty"'))
        )

        assert result.fields[0].name == "ObjectMeta"
        assert result.fields[0].type == "metav1.ObjectMeta"

    def test_field_doc_parsed(self, extractor):
        result = extractor.extract(
            self._type(
                DeclaredField(
                    Ident("int32"),
                    "Replicas",
                    'json:"replicas"',
                    doc="Replicas to run.\n+kubebuilder:default=1\n",
                )
            )
        )

        doc = result.fields[0].doc
        assert doc.sanitized == "Replicas to run."
        assert doc.annotations == {"kubebuilder:default": "1"}

    def test_missing_json_tag_is_fatal(self, extractor):
        with pytest.raises(MissingTagError, match="type Thing, field Name"):
            extractor.extract(self._type(DeclaredField(Ident("string"), "Name", None)))

    def test_tag_without_json_key_is_fatal(self, extractor):
        with pytest.raises(MissingTagError):
            extractor.extract(
                self._type(DeclaredField(Ident("string"), "Name", 'yaml:"name"'))
            )

    def test_unsupported_type_is_fatal(self, extractor):
        with pytest.raises(FieldExtractionError, match="field Callback"):
            extractor.extract(
                self._type(DeclaredField(UnsupportedExpr("func"), "Callback", 'json:"cb"'))
            )
