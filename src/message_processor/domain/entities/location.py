from typing import Optional

from sqlalchemy import Column, Text
from sqlmodel import Field, SQLModel


class Location(SQLModel, table=True):
    """A site belonging to a company; one is created per incoming device entry."""

    __tablename__ = "locations"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=255, nullable=False)
    address: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    parent_id: int = Field(foreign_key="companies.id", nullable=False, index=True)
