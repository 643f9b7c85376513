"""Packing list models - engine output."""

from typing import Annotated

from pydantic import BaseModel, Field


class PackingItem(BaseModel):
    """Single item to pack. `is_packed` is only toggled by callers."""

    name: Annotated[str, Field(min_length=1)]
    quantity: Annotated[int, Field(ge=1)] = 1
    is_packed: bool = False
    notes: str = ""


class PackingCategory(BaseModel):
    """Named, ordered group of packing items."""

    name: Annotated[str, Field(min_length=1)]
    items: list[PackingItem] = Field(default_factory=list)
