from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# strict: numbers are not accepted as names, numeric strings and booleans not as prices
Name = Annotated[str, Field(strict=True, min_length=1)]
Price = Annotated[float, Field(strict=True, ge=0, allow_inf_nan=False)]


class RequestBody(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    def changes(self) -> dict[str, Any]:
        """Fields the client actually supplied, ready for a $set."""
        return self.model_dump(exclude_unset=True)


class PartialBody(RequestBody):
    """Every field optional, but a field that is sent must hold a real value."""

    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("must not be null")
        return value

    @model_validator(mode="after")
    def require_one_field(self):
        if not self.model_fields_set:
            raise ValueError("Nothing to update")
        return self


class ProductCreate(RequestBody):
    """Body for POST and for the full-update PUT."""
    name: Name
    price: Price
    category: Name


class ProductUpdate(PartialBody):
    """Body for PATCH: any subset of the product fields, at least one."""
    name: Name | None = None
    price: Price | None = None
    category: Name | None = None


class ItemCreate(RequestBody):
    name: Name


class ItemUpdate(PartialBody):
    name: Name | None = None


def serialize_document(doc: dict) -> dict:
    """Mongo document -> JSON-ready dict. ObjectId becomes its hex string."""
    out = dict(doc)
    if "_id" in out:
        out["_id"] = str(out["_id"])
    return out
