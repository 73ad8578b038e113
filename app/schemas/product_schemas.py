from pydantic import BaseModel, Field
from typing import Optional, List


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    price: float = Field(..., gt=0)
    image: str
    colors: List[str] = Field(default_factory=list)

    category: Optional[str] = None
    description: Optional[str] = None
    stock: int = Field(default=0, ge=0)


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    price: Optional[float] = Field(None, gt=0)
    image: Optional[str] = None
    colors: Optional[List[str]] = None

    category: Optional[str] = None
    description: Optional[str] = None
    stock: Optional[int] = Field(None, ge=0)


class ProductRead(BaseModel):
    id: str
    name: str
    price: float
    image: str
    colors: List[str] = []
    category: Optional[str] = None
    description: Optional[str] = None
    stock: int = 0

    model_config = {"from_attributes": True}
