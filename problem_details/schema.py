"""Pydantic model for the Problem response schema."""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from .problem import BLANK_TYPE


class Problem(BaseModel):
    """Model of the RFC7807 Problem response schema.

    Extension members are allowed alongside the standard members.
    """

    model_config = ConfigDict(extra='allow')

    type: str = BLANK_TYPE
    title: Optional[str] = None
    status: Optional[int] = None
    detail: Optional[str] = None
    instance: Optional[str] = None
