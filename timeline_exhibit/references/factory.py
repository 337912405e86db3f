"""Factory for creating reference parser strategies."""

from __future__ import annotations

from enum import Enum, auto

from timeline_exhibit.collaborators import ResourceRepository
from timeline_exhibit.references.strategy import ReferenceParserStrategy


class ReferenceParsers(Enum):
    """Enumeration of available reference parsing strategies."""
    NUMERIC_RESOURCE = auto()
    ASSET_PATH = auto()
    RESOURCE_LOOKUP = auto()
    ASSET_LOOKUP = auto()
    ABSOLUTE_URL = auto()
    IDENTIFIER_SEARCH = auto()
    LITERAL = auto()


class ReferenceParserFactory:
    """Factory for creating ReferenceParserStrategy instances."""

    @staticmethod
    def get_parser(
        strategy: ReferenceParsers,
        repository: ResourceRepository | None = None,
    ) -> ReferenceParserStrategy:
        """Get a parser instance for the specified strategy.

        Args:
            strategy: The type of parser to create
            repository: Repository used by the lookup strategies

        Returns:
            An instance of the requested parser strategy

        Raises:
            ValueError: If the strategy is unknown, or needs a repository
                and none was given
        """
        from timeline_exhibit.references.absolute_url_parser import AbsoluteUrlParser
        from timeline_exhibit.references.asset_lookup_parser import AssetLookupParser
        from timeline_exhibit.references.asset_path_parser import AssetPathParser
        from timeline_exhibit.references.identifier_search_parser import IdentifierSearchParser
        from timeline_exhibit.references.literal_parser import LiteralParser
        from timeline_exhibit.references.numeric_resource_parser import NumericResourceParser
        from timeline_exhibit.references.resource_lookup_parser import ResourceLookupParser

        needs_repository = {
            ReferenceParsers.RESOURCE_LOOKUP,
            ReferenceParsers.ASSET_LOOKUP,
            ReferenceParsers.IDENTIFIER_SEARCH,
        }
        if strategy in needs_repository and repository is None:
            raise ValueError(f"Strategy {strategy} requires a repository")

        if strategy == ReferenceParsers.NUMERIC_RESOURCE:
            return NumericResourceParser(repository)
        elif strategy == ReferenceParsers.ASSET_PATH:
            return AssetPathParser(repository)
        elif strategy == ReferenceParsers.RESOURCE_LOOKUP:
            return ResourceLookupParser(repository)
        elif strategy == ReferenceParsers.ASSET_LOOKUP:
            return AssetLookupParser(repository)
        elif strategy == ReferenceParsers.ABSOLUTE_URL:
            return AbsoluteUrlParser(repository)
        elif strategy == ReferenceParsers.IDENTIFIER_SEARCH:
            return IdentifierSearchParser(repository)
        elif strategy == ReferenceParsers.LITERAL:
            return LiteralParser(repository)
        else:
            raise ValueError(f"Unknown strategy: {strategy}")
