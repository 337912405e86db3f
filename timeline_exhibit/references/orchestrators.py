"""Resolvers trying reference parser strategies in order."""

from __future__ import annotations

from abc import ABC, abstractmethod

from timeline_exhibit.collaborators import ResourceRepository
from timeline_exhibit.references.factory import ReferenceParserFactory, ReferenceParsers
from timeline_exhibit.references.strategy import ReferenceOutcome
from timeline_exhibit.slide import ColorRef, ExternalRef, ExternalUrlRef


class ReferenceResolver(ABC):
    """Base class for resolvers that try several parser strategies in order.

    Subclasses define the order and selection of parsers. The first parser
    returning an outcome wins.
    """

    def __init__(self, repository: ResourceRepository | None = None):
        self.repository = repository
        self._parsers = [
            ReferenceParserFactory.get_parser(step, repository)
            for step in self.get_parser_steps()
        ]

    @abstractmethod
    def get_parser_steps(self) -> list[ReferenceParsers]:
        """Return the ordered list of parser strategies to try."""
        pass

    def resolve(self, raw) -> ReferenceOutcome | None:
        """Classify a raw scalar value.

        Args:
            raw: Cell or field value (string, int or None)

        Returns:
            The first parser outcome, or None for an empty value
        """
        if raw is None or isinstance(raw, bool):
            return None
        value = str(raw).strip()
        if not value:
            return None
        for parser in self._parsers:
            outcome = parser.parse(value)
            if outcome is not None:
                return outcome
        return None


class DirectReferenceResolver(ReferenceResolver):
    """Classifies by shape only, without touching the repository."""

    def get_parser_steps(self) -> list[ReferenceParsers]:
        return [
            ReferenceParsers.NUMERIC_RESOURCE,
            ReferenceParsers.ASSET_PATH,
            ReferenceParsers.LITERAL,
        ]


class LookupReferenceResolver(ReferenceResolver):
    """Checks internal references and resolves free identifiers."""

    def get_parser_steps(self) -> list[ReferenceParsers]:
        return [
            ReferenceParsers.RESOURCE_LOOKUP,
            ReferenceParsers.ASSET_LOOKUP,
            ReferenceParsers.ABSOLUTE_URL,
            ReferenceParsers.IDENTIFIER_SEARCH,
            ReferenceParsers.LITERAL,
        ]


def as_background(outcome: ReferenceOutcome | None):
    """Turn a resolved media outcome into a background reference.

    An external value is a url when it uses an http scheme, any other string
    is a color.
    """
    if not isinstance(outcome, ExternalRef):
        return outcome
    if outcome.value.lower().startswith(("http://", "https://")):
        return ExternalUrlRef(outcome.value)
    return ColorRef(outcome.value)


def resolve_media(raw):
    """Classify a raw value by shape: resource id, asset path or external string."""
    return DirectReferenceResolver().resolve(raw)
