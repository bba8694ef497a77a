"""Shared Pydantic data models for the price discovery engine.

These models define the input contracts handed to the engine by its
callers (scheduled jobs, operator tools). Output records produced by a
scrape live next to the scraper in ``src.price_discovery.car_part.models``.
"""

from __future__ import annotations

from pydantic import BaseModel, field_validator

DEFAULT_POSTAL_CODE = "60018"


class VehiclePartQuery(BaseModel):
    """Vehicle + part descriptor for one catalog search.

    ``variant_value`` left as None means the catalog variant is resolved
    automatically during the scrape.
    """
    model_config = {"frozen": True}

    year: str
    make: str
    model: str
    part: str
    variant_value: str | None = None
    postal_code: str = DEFAULT_POSTAL_CODE

    @field_validator("year", "make", "model", "part", mode="before")
    @classmethod
    def _require_text(cls, value: object) -> str:
        text = str(value).strip() if value is not None else ""
        if not text:
            raise ValueError("must be a non-empty string")
        return text

    @field_validator("variant_value", mode="before")
    @classmethod
    def _blank_variant_is_unbound(cls, value: object) -> str | None:
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @property
    def make_model(self) -> str:
        """Combined make+model string the catalog expects."""
        return f"{self.make} {self.model}"

    def with_variant(self, variant_value: str) -> VehiclePartQuery:
        """Return a copy of this query with the variant bound."""
        return self.model_copy(update={"variant_value": variant_value})


class VariantOption(BaseModel):
    """A catalog sub-choice (e.g. engine size) for an ambiguous query."""
    label: str
    value: str
