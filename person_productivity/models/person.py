"""Person domain model."""

from typing import Optional

from pydantic import BaseModel, Field


class Person(BaseModel):
    """A person who owns zero or more tasks.

    ``id`` is assigned by the record store when the person is first saved.
    """

    id: Optional[int] = Field(None, description="Store-assigned person identifier")
    name: str = Field(..., min_length=1, max_length=255, description="Full name")
    email: str = Field(..., min_length=1, description="Email address")
