"""Unit tests for reference parser strategies and resolvers."""

import pytest

from timeline_exhibit.references import (
    DirectReferenceResolver,
    LookupReferenceResolver,
    ReferenceParserFactory,
    ReferenceParsers,
    as_background,
    resolve_media,
)
from timeline_exhibit.references.absolute_url_parser import AbsoluteUrlParser
from timeline_exhibit.references.literal_parser import LiteralParser
from timeline_exhibit.slide import (
    AssetRef,
    ColorRef,
    ExternalRef,
    ExternalUrlRef,
    ResourceRef,
    UnresolvedRef,
)


class TestResolveMedia:
    """Classification by shape only."""

    @pytest.mark.parametrize("raw,expected", [
        ("42", ResourceRef(42)),
        (42, ResourceRef(42)),
        ("asset/42", AssetRef(42)),
        ("https://example.org/a.jpg", ExternalRef("https://example.org/a.jpg")),
        ("some words", ExternalRef("some words")),
        ("  7  ", ResourceRef(7)),
    ])
    def test_classification(self, raw, expected):
        assert resolve_media(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "   ", False])
    def test_empty_is_none(self, raw):
        assert resolve_media(raw) is None

    def test_asset_path_needs_digits(self):
        assert resolve_media("asset/abc") == ExternalRef("asset/abc")

    def test_no_repository_needed(self):
        assert DirectReferenceResolver().resolve("99999") == ResourceRef(99999)


class TestLookupReferenceResolver:
    """Classification with existence checks and identifier search."""

    @pytest.fixture(autouse=True)
    def setup_resolver(self, repository):
        self.resolver = LookupReferenceResolver(repository)

    def test_existing_resource(self):
        assert self.resolver.resolve("42") == ResourceRef(42)

    def test_unknown_resource(self):
        outcome = self.resolver.resolve("404")
        assert isinstance(outcome, UnresolvedRef)
        assert outcome.reason == 'The Media "404" is an unknown resource.'

    def test_existing_asset(self):
        assert self.resolver.resolve("asset/7") == AssetRef(7)

    def test_unknown_asset(self):
        outcome = self.resolver.resolve("asset/8")
        assert isinstance(outcome, UnresolvedRef)
        assert outcome.reason == 'The asset "asset/8" is unknown.'

    def test_url_is_external(self):
        assert self.resolver.resolve("https://example.org/pyramid") == ExternalRef("https://example.org/pyramid")

    def test_identifier_resolves_to_resource(self):
        assert self.resolver.resolve("moon-landing") == ResourceRef(42)

    def test_unknown_identifier_is_literal(self):
        assert self.resolver.resolve("the big bang") == ExternalRef("the big bang")


class TestAsBackground:
    """Background classification of resolved values."""

    def test_http_url(self):
        assert as_background(ExternalRef("http://example.org/bg.png")) == ExternalUrlRef("http://example.org/bg.png")

    def test_https_url(self):
        assert as_background(ExternalRef("https://example.org/bg.png")) == ExternalUrlRef("https://example.org/bg.png")

    @pytest.mark.parametrize("url", ["HTTPS://example.org/bg.png", "Http://example.org/bg.png"])
    def test_url_scheme_is_case_insensitive(self, url):
        assert as_background(ExternalRef(url)) == ExternalUrlRef(url)

    def test_color(self):
        assert as_background(ExternalRef("#ff0000")) == ColorRef("#ff0000")

    def test_internal_refs_pass_through(self):
        assert as_background(ResourceRef(1)) == ResourceRef(1)
        assert as_background(AssetRef(7)) == AssetRef(7)
        assert as_background(None) is None


class TestReferenceParserFactory:
    """Factory creation of strategies."""

    def test_creates_parser(self):
        assert isinstance(ReferenceParserFactory.get_parser(ReferenceParsers.ABSOLUTE_URL), AbsoluteUrlParser)
        assert isinstance(ReferenceParserFactory.get_parser(ReferenceParsers.LITERAL), LiteralParser)

    @pytest.mark.parametrize("strategy", [
        ReferenceParsers.RESOURCE_LOOKUP,
        ReferenceParsers.ASSET_LOOKUP,
        ReferenceParsers.IDENTIFIER_SEARCH,
    ])
    def test_lookup_strategies_need_a_repository(self, strategy):
        with pytest.raises(ValueError):
            ReferenceParserFactory.get_parser(strategy)

    def test_absolute_url_parser_rejects_relative_paths(self):
        parser = AbsoluteUrlParser()
        assert parser.parse("images/a.jpg") is None
        assert parser.parse("https://example.org/a b.jpg") is None
