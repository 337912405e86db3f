"""Parser for asset paths checked against the repository."""

from timeline_exhibit.collaborators import Found
from timeline_exhibit.references.strategy import ReferenceOutcome, ReferenceParserStrategy
from timeline_exhibit.slide import AssetRef, UnresolvedRef


class AssetLookupParser(ReferenceParserStrategy):
    """Parses ``asset/<id>`` and reads the asset it points to."""

    def parse(self, value: str) -> ReferenceOutcome | None:
        asset_id = self.asset_id(value)
        if asset_id is None:
            return None
        result = self.repository.lookup_asset(asset_id)
        if isinstance(result, Found):
            return AssetRef(int(result.value.id))
        return UnresolvedRef(value, f'The asset "{value}" is unknown.')
