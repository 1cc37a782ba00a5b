from typing import Optional

from sqlmodel import Field, SQLModel


class Company(SQLModel, table=True):
    """A customer company, created from a NewCompany message.

    Attributes:
        id: Store-assigned primary key.
        name: Display name of the company.
        code: Business identifier; unique across all companies.
        licensing: Integer value of a ``LicensingType`` member.
    """

    __tablename__ = "companies"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=255, nullable=False)
    code: str = Field(max_length=50, nullable=False, unique=True)
    licensing: int = Field(nullable=False)
