"""
Pydantic models for user data.

A user is identified by ``uid``; every other field is passed through
untouched, so the models allow extra attributes.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class User(BaseModel):
    """A user as stored and returned by the API.

    ``uid`` may be omitted on creation, in which case the service
    generates one.
    """

    uid: Optional[str] = Field(None, examples=["abc-123"])
    email: Optional[str] = Field(None, examples=["user@example.com"])

    model_config = {
        "extra": "allow",
    }


class QueryField(str, Enum):
    """Field a user listing is filtered by."""

    UID = "uid"
    EMAIL = "email"
    ALL = "all"


class QueryDescriptor(BaseModel):
    """Result of classifying a listing query string."""

    by: QueryField
    param: Optional[str] = None
