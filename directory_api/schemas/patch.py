"""JSON-patch operation schemas.

Only the four operations the API supports are accepted, and only on a
top-level field path such as ``/name``.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, RootModel

_PATH = r"^/[A-Za-z_][A-Za-z0-9_]*$"


class AddOp(BaseModel):
    op: Literal["add"]
    path: str = Field(pattern=_PATH)
    value: Any


class RemoveOp(BaseModel):
    op: Literal["remove"]
    path: str = Field(pattern=_PATH)


class ReplaceOp(BaseModel):
    op: Literal["replace"]
    path: str = Field(pattern=_PATH)
    value: Any


class TestOp(BaseModel):
    op: Literal["test"]
    path: str = Field(pattern=_PATH)
    value: Any


PatchOperation = Annotated[
    Union[AddOp, RemoveOp, ReplaceOp, TestOp], Field(discriminator="op")
]


class PatchDocument(RootModel[list[PatchOperation]]):
    """Request body of every PATCH endpoint."""
