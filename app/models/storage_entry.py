from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime


class StorageEntry(SQLModel, table=True):
    __tablename__ = "storage_entry"

    scope: str = Field(primary_key=True)   # user id, or "anonymous"
    key: str = Field(primary_key=True)     # cart / recentlyViewed / user / orders
    value: str

    updated_at: Optional[datetime] = Field(default_factory=datetime.utcnow)
