import pytest

from openapi_dereferencer.cache import ResolutionCache
from openapi_dereferencer.errors import CircularReference, ParsingError, UnsupportedRefFormat
from openapi_dereferencer.model import Parameter
from openapi_dereferencer.resolver import PointerResolver

DOCUMENT = {
    "components": {
        "parameters": {
            "limit": {"name": "limit", "in": "query"},
            "pageSize": {"$ref": "#/components/parameters/limit"},
            "size": {"$ref": "#/components/parameters/pageSize"},
            "loopA": {"$ref": "#/components/parameters/loopB"},
            "loopB": {"$ref": "#/components/parameters/loopA"},
            "broken": {"name": "broken", "in": "body"},
        }
    }
}


class TestResolutionCache:
    def test_store_is_write_once(self):
        cache = ResolutionCache()
        assert cache.store("#/a", 1) == 1
        assert cache.store("#/a", 2) == 1
        assert len(cache) == 1

    def test_lookup_counts_hits_and_misses(self):
        cache = ResolutionCache()
        assert cache.lookup("#/a") == (False, None)
        cache.store("#/a", {"x": 1})
        assert cache.lookup("#/a") == (True, {"x": 1})
        assert (cache.hits, cache.misses) == (1, 1)
        assert cache.pointers() == ["#/a"]


class TestPointerResolver:
    def test_resolves_and_decodes(self):
        resolver = PointerResolver(DOCUMENT)
        parameter = resolver.resolve("#/components/parameters/limit", Parameter.from_dict)
        assert isinstance(parameter, Parameter)
        assert parameter.name == "limit"
        assert parameter.location == "query"

    def test_second_resolution_uses_cache(self):
        resolver = PointerResolver(DOCUMENT)
        first = resolver.resolve("#/components/parameters/limit", Parameter.from_dict)
        second = resolver.resolve("#/components/parameters/limit", Parameter.from_dict)
        assert first == second
        assert first is not second
        assert resolver.cache.misses == 1
        assert resolver.cache.hits == 1

    def test_shared_cache(self):
        cache = ResolutionCache()
        PointerResolver(DOCUMENT, cache).resolve("#/components/parameters/limit", Parameter.from_dict)
        assert "#/components/parameters/limit" in cache

    def test_decoded_values_do_not_alias_the_document(self):
        resolver = PointerResolver(DOCUMENT)
        parameter = resolver.resolve("#/components/parameters/limit", Parameter.from_dict)
        parameter.extra["x-touched"] = True
        assert "x-touched" not in DOCUMENT["components"]["parameters"]["limit"]

    def test_follows_chained_references(self):
        resolver = PointerResolver(DOCUMENT)
        parameter = resolver.resolve("#/components/parameters/size", Parameter.from_dict)
        assert parameter.name == "limit"
        assert resolver.cache.pointers() == [
            "#/components/parameters/size",
            "#/components/parameters/pageSize",
            "#/components/parameters/limit",
        ]

    def test_chained_reference_loop(self):
        resolver = PointerResolver(DOCUMENT)
        with pytest.raises(CircularReference) as exc_info:
            resolver.resolve("#/components/parameters/loopA", Parameter.from_dict)
        assert exc_info.value.reference == "#/components/parameters/loopA"

    def test_chained_reference_without_following(self):
        resolver = PointerResolver(DOCUMENT, follow_chained_refs=False)
        with pytest.raises(ParsingError):
            resolver.resolve("#/components/parameters/pageSize", Parameter.from_dict)

    def test_decode_error_names_pointer(self):
        resolver = PointerResolver(DOCUMENT)
        with pytest.raises(ParsingError) as exc_info:
            resolver.resolve("#/components/parameters/broken", Parameter.from_dict)
        assert "#/components/parameters/broken" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, ParsingError)

    def test_missing_target(self):
        resolver = PointerResolver(DOCUMENT)
        with pytest.raises(ParsingError):
            resolver.resolve("#/components/parameters/offset", Parameter.from_dict)
        assert len(resolver.cache) == 0

    def test_external_reference(self):
        resolver = PointerResolver(DOCUMENT)
        with pytest.raises(UnsupportedRefFormat):
            resolver.resolve("common.json#/components/parameters/limit", Parameter.from_dict)

    def test_expanding_detects_reentry(self):
        resolver = PointerResolver(DOCUMENT)
        with resolver.expanding("#/a"):
            with resolver.expanding("#/b"):
                assert resolver.active == ["#/a", "#/b"]
                with pytest.raises(CircularReference) as exc_info:
                    with resolver.expanding("#/a"):
                        pass
        assert exc_info.value.chain == ["#/a", "#/b"]
        assert resolver.active == []

    def test_expanding_siblings_is_allowed(self):
        resolver = PointerResolver(DOCUMENT)
        with resolver.expanding("#/a"):
            pass
        with resolver.expanding("#/a"):
            pass
        assert resolver.active == []
