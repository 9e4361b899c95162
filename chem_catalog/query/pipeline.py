"""
Search and sort pipeline for catalog listings.

One ``QueryPipeline`` is configured per record kind with the fields a
search term is matched against and the sort keys it recognizes. The
pipeline is called on every keystroke of a live search, so it keeps no
state between calls and never touches the input list.
"""

import unicodedata
from typing import Dict, List, Optional, Sequence, Tuple, TypeVar

R = TypeVar("R")


def collation_key(value: Optional[str]) -> Tuple[str, str]:
    """
    Build a locale-style sort key for a string.

    Compares accent- and case-folded text first; ties are broken with
    lowercase ordered before uppercase.
    """
    text = value or ""
    decomposed = unicodedata.normalize("NFKD", text)
    folded = "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()
    return folded, text.swapcase()


class QueryPipeline:
    """
    Case-insensitive substring filter followed by a stable field sort.

    Attributes:
        search_fields: Record attributes a search term is matched against
        sort_fields: Public sort key -> record attribute
    """

    def __init__(self, search_fields: Sequence[str], sort_fields: Dict[str, str]):
        self.search_fields = tuple(search_fields)
        self.sort_fields = dict(sort_fields)

    def matches(self, record, term: str) -> bool:
        """Check if a lower-cased term occurs in any search field."""
        for attr in self.search_fields:
            value = getattr(record, attr, None) or ""
            if term in value.lower():
                return True
        return False

    def filter_and_sort(
        self,
        records: Sequence[R],
        search_term: Optional[str] = "",
        sort_key: Optional[str] = None,
    ) -> List[R]:
        """
        Filter records by a search term, then order them by a sort key.

        Args:
            records: Records to query (not modified)
            search_term: Free text; empty keeps every record
            sort_key: One of ``sort_fields``; anything else keeps input order

        Returns:
            New list of matching records
        """
        term = (search_term or "").lower()
        if term:
            filtered = [r for r in records if self.matches(r, term)]
        else:
            filtered = list(records)

        attr = self.sort_fields.get(sort_key) if sort_key else None
        if attr is None:
            return filtered

        filtered.sort(key=lambda r: collation_key(getattr(r, attr, None)))
        return filtered


CHEMICAL_QUERY = QueryPipeline(
    search_fields=("name", "type", "description"),
    sort_fields={"name": "name", "type": "type"},
)

PRODUCT_QUERY = QueryPipeline(
    search_fields=("product_name", "category", "description", "product_id"),
    sort_fields={"productName": "product_name", "category": "category"},
)
