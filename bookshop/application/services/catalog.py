"""
Catalog of publications with kind-filtered numbered selection.
"""

from typing import Iterator, List, Optional, Type, TypeVar

from bookshop.domain.exceptions import CatalogError, ValidationError
from bookshop.domain.models.catalog import Publication
from bookshop.domain.services.pricing import AmountFormatter

ItemT = TypeVar('ItemT', bound=Publication)


class Catalog:
    """Ordered collection of publications; insertion order drives display numbering."""
    
    def __init__(self, items: Optional[List[Publication]] = None):
        self._items: List[Publication] = []
        for item in items or []:
            self.add(item)
    
    def add(self, item: Publication) -> Publication:
        """Append an item. Identifiers must be unique within the catalog."""
        if not isinstance(item, Publication):
            raise ValidationError(f"Catalog items must be Publications, got {type(item)}",
                                  field="item", value=item)
        if self.find(item.identifier) is not None:
            raise CatalogError(f"Duplicate catalog identifier: {item.identifier}",
                               identifier=item.identifier)
        self._items.append(item)
        return item
    
    def find(self, identifier: str) -> Optional[Publication]:
        for item in self._items:
            if item.identifier == identifier:
                return item
        return None
    
    def get(self, identifier: str) -> Publication:
        """Like find, but an unknown identifier is an error."""
        item = self.find(identifier)
        if item is None:
            raise CatalogError(f"Unknown catalog identifier: {identifier}", identifier=identifier)
        return item
    
    def listing(self, kind: Type[ItemT] = Publication) -> List[ItemT]:
        """Items of the given kind, in insertion order."""
        return [item for item in self._items if isinstance(item, kind)]
    
    def numbered_lines(self, kind: Type[Publication] = Publication,
                       formatter: Optional[AmountFormatter] = None) -> List[str]:
        return [f"{number}. {item.describe(formatter)}"
                for number, item in enumerate(self.listing(kind), start=1)]
    
    def select(self, number: int, kind: Type[ItemT] = Publication) -> ItemT:
        """Pick an item by its 1-based position in the listing for ``kind``."""
        candidates = self.listing(kind)
        if not candidates:
            raise CatalogError("No items found.", context={'kind': kind.__name__})
        
        if number < 1 or number > len(candidates):
            raise ValidationError(f"Value must be between 1 and {len(candidates)}.",
                                  field="selection", value=number)
        return candidates[number - 1]
    
    def __iter__(self) -> Iterator[Publication]:
        return iter(list(self._items))
    
    def __len__(self) -> int:
        return len(self._items)
