"""
Service Domain Model

A laundry service in the catalog (wash & fold, dry cleaning, ironing...).
"""
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime


class PricingType(str, Enum):
    PER_ITEM = "per_item"
    PER_KG = "per_kg"


class Service(BaseModel):
    """
    Catalog entry

    Fields:
        base_price: Price per item in kobo (per_item services)
        price_per_kg: Price per kg in kobo (per_kg services)
        estimated_duration_hours: Typical turnaround
    """

    id: str
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    pricing_type: PricingType = PricingType.PER_ITEM
    base_price: int = Field(0, ge=0)
    price_per_kg: Optional[int] = Field(None, ge=0)
    estimated_duration_hours: Optional[int] = Field(None, ge=0)
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

    def unit_price(self) -> int:
        """Price of one pricing unit (item or kg) in kobo"""
        if self.pricing_type == PricingType.PER_KG.value:
            return self.price_per_kg if self.price_per_kg is not None else self.base_price
        return self.base_price

    def line_total(self, quantity: int, weight: Optional[float] = None) -> int:
        """
        Total for one order line in kobo

        per_kg services bill by weight (rounded to the nearest kobo); per_item
        services bill by quantity.
        """
        if self.pricing_type == PricingType.PER_KG.value:
            if weight is None or weight <= 0:
                raise ValueError(f"Service '{self.name}' is priced per kg; weight is required")
            return int(round(self.unit_price() * weight))
        return self.unit_price() * quantity
