import pytest

from openapi_dereferencer.errors import ParsingError, UnsupportedRefFormat
from openapi_dereferencer.pointer import QueryExpr, escape_segment, find_first, ref_to_json_path, ref_to_query


class TestRefToQuery:
    """Translation of local references into queries"""

    def test_ref_to_json_path(self):
        reference = "#/components/parameters/pagination-before"
        assert ref_to_json_path(reference) == "$.components.parameters.pagination-before"

    def test_segments(self):
        query = ref_to_query("#/components/schemas/Pet")
        assert query.segments == ("components", "schemas", "Pet")

    def test_root_reference(self):
        assert ref_to_query("#") == QueryExpr(segments=())
        assert str(ref_to_query("#/")) == "$"

    def test_empty_segments_are_skipped(self):
        assert ref_to_query("#/components//schemas/Pet").segments == ("components", "schemas", "Pet")

    def test_json_pointer_escapes(self):
        query = ref_to_query("#/paths/~1pets~1{petId}/get")
        assert query.segments == ("paths", "/pets/{petId}", "get")
        assert ref_to_query("#/components/schemas/a~0b").segments == ("components", "schemas", "a~b")

    @pytest.mark.parametrize(
        "reference",
        [
            "//elsewhere/components/parameters/pagination-before",
            "http://mysite.com/components/parameters/pagination-before",
            "other.json#/components/schemas/Pet",
            "",
        ],
    )
    def test_non_local_references_are_rejected(self, reference):
        with pytest.raises(UnsupportedRefFormat) as exc_info:
            ref_to_query(reference)
        assert exc_info.value.reference == reference


class TestFindFirst:
    """Evaluation of queries against raw documents"""

    DOCUMENT = {
        "components": {"parameters": {"limit": {"name": "limit", "in": "query"}}},
        "tags": [{"name": "pets"}, {"name": "stores"}],
    }

    def test_finds_mapping_entry(self):
        node = find_first(self.DOCUMENT, ref_to_query("#/components/parameters/limit"))
        assert node == {"name": "limit", "in": "query"}

    def test_finds_list_entry_by_index(self):
        assert find_first(self.DOCUMENT, ref_to_query("#/tags/1/name")) == "stores"

    def test_root_query_returns_document(self):
        assert find_first(self.DOCUMENT, ref_to_query("#")) is self.DOCUMENT

    def test_missing_key_raises(self):
        reference = "#/components/parameters/offset"
        with pytest.raises(ParsingError) as exc_info:
            find_first(self.DOCUMENT, ref_to_query(reference), reference)
        assert reference in str(exc_info.value)

    def test_index_out_of_range_raises(self):
        with pytest.raises(ParsingError):
            find_first(self.DOCUMENT, ref_to_query("#/tags/5"))

    @pytest.mark.parametrize("segment", ["²", "١", "-1", "01x"])
    def test_non_decimal_index_raises(self, segment):
        with pytest.raises(ParsingError):
            find_first(self.DOCUMENT, ref_to_query(f"#/tags/{segment}"))

    def test_cannot_walk_into_scalar(self):
        with pytest.raises(ParsingError):
            find_first(self.DOCUMENT, ref_to_query("#/tags/0/name/first"))


class TestEscapeSegment:
    def test_escape_round_trips_through_query(self):
        key = "/pets/{petId}~v2"
        assert escape_segment(key) == "~1pets~1{petId}~0v2"
        assert ref_to_query(f"#/paths/{escape_segment(key)}").segments == ("paths", key)
