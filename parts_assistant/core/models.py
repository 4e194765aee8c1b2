from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

LIST_SEPARATOR = ", "


def make_product_id(part_number: str) -> str:
    """Derive the catalog identifier for a part number (PS11752778 -> ps11752778)"""
    return re.sub(r"[^a-z0-9]", "_", part_number.lower())


TRUE_STRINGS = {"true", "yes", "y", "1", "on"}
FALSE_STRINGS = {"false", "no", "n", "0", "off", ""}


def _parse_bool(value: Any, default: bool = True) -> bool:
    """Read a flag that may arrive as a string ("false") in JSON exports"""
    if value is None:
        return default
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in TRUE_STRINGS:
            return True
        if normalized in FALSE_STRINGS:
            return False
        raise ValueError(f"Not a boolean value: {value!r}")
    return bool(value)


def _split_list(value: Union[str, List[str], None]) -> List[str]:
    # Chroma metadata only holds primitives, so lists round-trip as joined strings
    if not value:
        return []
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return [str(item) for item in value if item]


@dataclass
class ProductRecord:
    """Represents a single replacement part in the catalog"""

    id: str
    part_number: str
    name: str
    description: str = ""
    category: str = ""
    brand: str = "Various"
    compatible_models: List[str] = field(default_factory=list)
    replacement_parts: List[str] = field(default_factory=list)
    installation: str = ""
    troubleshooting: str = ""
    price: str = "Price available on website"
    in_stock: bool = True
    url: str = ""
    manufacturer_part_number: str = ""
    product_type: str = ""
    symptoms: List[str] = field(default_factory=list)
    image_url: str = ""

    def is_compatible_with(self, model_number: str) -> bool:
        model_upper = model_number.upper()
        return any(model.upper() == model_upper for model in self.compatible_models)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "part_number": self.part_number,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "brand": self.brand,
            "compatible_models": list(self.compatible_models),
            "replacement_parts": list(self.replacement_parts),
            "installation": self.installation,
            "troubleshooting": self.troubleshooting,
            "price": self.price,
            "in_stock": self.in_stock,
            "url": self.url,
            "manufacturer_part_number": self.manufacturer_part_number,
            "product_type": self.product_type,
            "symptoms": list(self.symptoms),
            "image_url": self.image_url,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProductRecord":
        part_number = data["part_number"]
        return cls(
            id=data.get("id") or make_product_id(part_number),
            part_number=part_number,
            name=data["name"],
            description=data.get("description") or "",
            category=data.get("category") or "",
            brand=data.get("brand") or "Various",
            compatible_models=_split_list(data.get("compatible_models")),
            replacement_parts=_split_list(data.get("replacement_parts")),
            installation=data.get("installation") or "",
            troubleshooting=data.get("troubleshooting") or "",
            price=data.get("price") or "Price available on website",
            in_stock=_parse_bool(data.get("in_stock")),
            url=data.get("url") or "",
            manufacturer_part_number=data.get("manufacturer_part_number") or "",
            product_type=data.get("product_type") or "",
            symptoms=_split_list(data.get("symptoms")),
            image_url=data.get("image_url") or "",
        )

    def to_metadata(self) -> Dict[str, Union[str, bool]]:
        """Flatten into primitive values for vector store metadata"""
        metadata = self.to_dict()
        metadata.pop("id")
        for key in ("compatible_models", "replacement_parts", "symptoms"):
            metadata[key] = LIST_SEPARATOR.join(metadata[key])
        return metadata

    @classmethod
    def from_metadata(cls, record_id: str, metadata: Dict[str, Any]) -> "ProductRecord":
        return cls.from_dict({**metadata, "id": record_id})

    def to_document_text(self) -> str:
        """Build the text that gets embedded for semantic search"""
        parts = [f"{self.name} ({self.part_number})."]
        if self.manufacturer_part_number:
            parts.append(f"Manufacturer Part Number: {self.manufacturer_part_number}.")
        if self.product_type:
            parts.append(f"Product type: {self.product_type}.")
        if self.description:
            parts.append(f"{self.description}.")
        parts.append(f"Category: {self.category}. Brand: {self.brand}.")
        if self.compatible_models:
            parts.append(f"Compatible models: {LIST_SEPARATOR.join(self.compatible_models)}.")
        if self.replacement_parts:
            parts.append(f"Replaces part numbers: {LIST_SEPARATOR.join(self.replacement_parts)}.")
        if self.symptoms:
            parts.append(f"Fixes symptoms: {LIST_SEPARATOR.join(self.symptoms)}.")
        if self.installation:
            parts.append(self.installation)
        if self.troubleshooting:
            parts.append(self.troubleshooting)
        return " ".join(parts)
