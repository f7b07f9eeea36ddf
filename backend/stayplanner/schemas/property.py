# stayplanner/schemas/property.py
from typing import Optional
from pydantic import BaseModel


class PropertyBase(BaseModel):
    id: int
    slug: str
    title: str
    description: Optional[str] = None
    price: float
    city: Optional[str] = None
    is_active: bool

    class Config:
        from_attributes = True


class PropertyCreate(BaseModel):
    slug: str
    title: str
    description: str = ""
    price: float = 0
    city: Optional[str] = None
