"""
Record types for the chemical / product catalog.

Defines the two record kinds held by the catalog store and their
translation to and from the camelCase JSON layout used on disk and in
browser storage.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from chem_catalog.catalog.exceptions import ValidationFailure


class RecordKind(Enum):
    """The two record collections tracked by the catalog."""
    CHEMICAL = "chemicals"
    PRODUCT = "products"


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _as_name_list(value: Any, field_name: str) -> Optional[List[str]]:
    """
    Coerce a JSON value into a list of names, keeping None as absent.

    Raises:
        ValidationFailure: If the value is neither a string nor an array
    """
    if value is None:
        return None
    if isinstance(value, str):
        return [value]
    if not isinstance(value, (list, tuple)):
        raise ValidationFailure(
            field_name, f"Field {field_name} must be a list of names, got {type(value).__name__}"
        )
    return [_as_text(item) for item in value]


@dataclass
class Chemical:
    """
    A harmful-substance record with regulatory and usage metadata.

    ``name`` is the join key referenced by ``Product.harmful_chemicals``.
    Uniqueness is assumed, not enforced.
    """
    name: str
    type: str = ""
    description: str = ""
    common_uses: str = ""
    regulatory_status: str = ""
    preservative: bool = False
    image: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    # JSON key -> attribute name
    FIELD_MAP = {
        "name": "name",
        "type": "type",
        "description": "description",
        "commonUses": "common_uses",
        "regulatoryStatus": "regulatory_status",
        "preservative": "preservative",
        "image": "image",
    }

    @property
    def key(self) -> str:
        return self.name

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Chemical":
        """Build a Chemical from a camelCase JSON mapping."""
        extra = {k: v for k, v in data.items() if k not in cls.FIELD_MAP}
        return cls(
            name=_as_text(data.get("name")),
            type=_as_text(data.get("type")),
            description=_as_text(data.get("description")),
            common_uses=_as_text(data.get("commonUses")),
            regulatory_status=_as_text(data.get("regulatoryStatus")),
            preservative=bool(data.get("preservative") or False),
            image=_as_text(data.get("image")),
            extra=extra,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase JSON layout."""
        data = {
            "name": self.name,
            "type": self.type,
            "description": self.description,
            "commonUses": self.common_uses,
            "regulatoryStatus": self.regulatory_status,
            "preservative": self.preservative,
            "image": self.image,
        }
        data.update(self.extra)
        return data


@dataclass
class Product:
    """
    A consumer product optionally listing the harmful chemicals it contains.

    ``harmful_chemicals`` entries should name existing chemicals, but
    dangling names are tolerated everywhere. ``None`` for either list
    field means the attribute was absent in the source data.
    """
    product_id: str
    product_name: str = ""
    category: str = ""
    description: str = ""
    ingredients: Optional[List[str]] = None
    is_organic: bool = False
    harmful_chemicals: Optional[List[str]] = None
    image: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    FIELD_MAP = {
        "productId": "product_id",
        "productName": "product_name",
        "category": "category",
        "description": "description",
        "ingredients": "ingredients",
        "isOrganic": "is_organic",
        "harmfulChemicals": "harmful_chemicals",
        "image": "image",
    }

    @property
    def key(self) -> str:
        return self.product_id

    @property
    def harmful_count(self) -> int:
        """Number of harmful chemicals listed (0 when absent)."""
        return len(self.harmful_chemicals) if self.harmful_chemicals else 0

    def contains(self, chemical_name: str) -> bool:
        return bool(self.harmful_chemicals) and chemical_name in self.harmful_chemicals

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Product":
        """Build a Product from a camelCase JSON mapping."""
        extra = {k: v for k, v in data.items() if k not in cls.FIELD_MAP}
        return cls(
            product_id=_as_text(data.get("productId")),
            product_name=_as_text(data.get("productName")),
            category=_as_text(data.get("category")),
            description=_as_text(data.get("description")),
            ingredients=_as_name_list(data.get("ingredients"), "ingredients"),
            is_organic=bool(data.get("isOrganic") or False),
            harmful_chemicals=_as_name_list(data.get("harmfulChemicals"), "harmfulChemicals"),
            image=_as_text(data.get("image")),
            extra=extra,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase JSON layout, omitting absent lists."""
        data: Dict[str, Any] = {
            "productId": self.product_id,
            "productName": self.product_name,
            "category": self.category,
            "description": self.description,
        }
        if self.ingredients is not None:
            data["ingredients"] = list(self.ingredients)
        data["isOrganic"] = self.is_organic
        if self.harmful_chemicals is not None:
            data["harmfulChemicals"] = list(self.harmful_chemicals)
        data["image"] = self.image
        data.update(self.extra)
        return data


RECORD_TYPES = {
    RecordKind.CHEMICAL: Chemical,
    RecordKind.PRODUCT: Product,
}
