"""Category catalog and expansion into provider type codes."""
from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from .errors import InvalidRequestError
from .models import CategoryDescriptor


def _d(type_code: str, *synonyms: str) -> CategoryDescriptor:
    return CategoryDescriptor(provider_type_code=type_code, synonyms=tuple(synonyms))


# Common place types for different task categories
PLACE_TYPES: Dict[str, Tuple[CategoryDescriptor, ...]] = {
    "GROCERY": (
        _d("grocery_or_supermarket", "grocery", "supermarket", "food"),
        _d("supermarket", "supermarket", "grocery"),
    ),
    "PHARMACY": (_d("pharmacy", "pharmacy", "drugstore", "medicine"),),
    "GAS_STATION": (_d("gas_station", "gas", "fuel", "petrol"),),
    "RESTAURANT": (
        _d("restaurant", "restaurant", "food", "dining"),
        _d("meal_takeaway", "takeaway", "takeout"),
    ),
    "BANK": (
        _d("bank", "bank", "atm"),
        _d("atm", "atm", "cash"),
    ),
    "SHOPPING": (
        _d("shopping_mall", "mall", "shopping"),
        _d("store", "store", "shop"),
    ),
    "MEDICAL": (
        _d("hospital", "hospital", "medical"),
        _d("doctor", "doctor", "clinic"),
    ),
    "FITNESS": (_d("gym", "gym", "fitness", "workout"),),
}


def normalize_category_name(name: str) -> str:
    return "_".join(name.strip().upper().replace("-", " ").split())


def get_category(name: str) -> Tuple[CategoryDescriptor, ...]:
    key = normalize_category_name(name)
    if key not in PLACE_TYPES:
        raise InvalidRequestError(
            f"Unknown category {name!r}; expected one of: " + ", ".join(sorted(PLACE_TYPES))
        )
    return PLACE_TYPES[key]


def categories_for(names: Iterable[str]) -> Tuple[CategoryDescriptor, ...]:
    """Resolve category names to descriptors, keeping the caller's order."""
    out: List[CategoryDescriptor] = []
    for name in names:
        out.extend(get_category(name))
    return tuple(out)


def expand_categories(categories: Iterable[CategoryDescriptor]) -> List[str]:
    # Repeated type codes are kept; dedup happens later by place id.
    return [c.provider_type_code for c in categories]
