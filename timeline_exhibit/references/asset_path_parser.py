"""Parser for asset paths, without existence check."""

from timeline_exhibit.references.strategy import ReferenceOutcome, ReferenceParserStrategy
from timeline_exhibit.slide import AssetRef


class AssetPathParser(ReferenceParserStrategy):
    """Parses ``asset/<id>`` as an asset id.

    Example: asset/7
    """

    def parse(self, value: str) -> ReferenceOutcome | None:
        asset_id = self.asset_id(value)
        if asset_id is None:
            return None
        return AssetRef(asset_id)
