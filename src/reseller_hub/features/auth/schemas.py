"""Pydantic schemas for authentication, defining the structure for request and response data."""
from dataclasses import dataclass

from pydantic import BaseModel


class Token(BaseModel):
    access_token: str
    token_type: str


@dataclass(frozen=True)
class Principal:
    """The authenticated caller as resolved from the bearer token."""

    id: int
    role: str
