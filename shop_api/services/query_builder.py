"""
Turns the product listing query string into a Mongo filter, sort and
projection. Knows nothing about the store beyond the document shapes.
"""
import math
from dataclasses import dataclass, field

from pymongo import ASCENDING

SORTABLE_FIELDS = {"price": "price"}


class InvalidQueryParameter(ValueError):
    pass


@dataclass
class ProductQuery:
    filter: dict = field(default_factory=dict)
    sort: list[tuple[str, int]] | None = None
    projection: dict[str, int] | None = None


def parse_min_price(value: str | None) -> float | None:
    if value is None or not value.strip():
        return None
    try:
        number = float(value)
    except ValueError:
        raise InvalidQueryParameter("minPrice must be a number")
    # float() happily parses "nan" and "inf"; neither makes a sane $gte bound
    if not math.isfinite(number):
        raise InvalidQueryParameter("minPrice must be a number")
    return number


def _is_valid_field_path(name: str) -> bool:
    return all(part and not part.startswith("$") for part in name.split("."))


def parse_fields(value: str | None) -> list[str]:
    """
    Split the comma-separated projection list. Names Mongo would refuse in a
    projection (operators, empty path segments, a path next to one of its own
    sub-paths) are rejected up front.
    """
    if not value:
        return []
    names = list(dict.fromkeys(name.strip() for name in value.split(",") if name.strip()))
    for name in names:
        if not _is_valid_field_path(name):
            raise InvalidQueryParameter(f"Invalid field name: {name}")
    for name in names:
        for other in names:
            if other.startswith(name + "."):
                raise InvalidQueryParameter(f"Conflicting fields: {name}, {other}")
    return names


def build_product_query(
    category: str | None = None,
    min_price: str | None = None,
    sort: str | None = None,
    fields: str | None = None,
) -> ProductQuery:
    query = ProductQuery()

    if category:
        query.filter["category"] = category

    price = parse_min_price(min_price)
    if price is not None:
        query.filter["price"] = {"$gte": price}

    if sort in SORTABLE_FIELDS:
        query.sort = [(SORTABLE_FIELDS[sort], ASCENDING)]

    names = parse_fields(fields)
    if names:
        query.projection = {name: 1 for name in names}

    return query
