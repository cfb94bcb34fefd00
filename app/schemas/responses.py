"""
schemas/responses.py — Shared success envelopes

Every successful read or write answers with {"data": ...}, either a list
of entities or a single entity. Parameterized over the entity schema so
OpenAPI documents the payload.

Called by: routers/dashboard_templates.py
Depends on: pydantic
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ListResponse(BaseModel, Generic[T]):
    data: list[T] = Field(default_factory=list)


class EntityResponse(BaseModel, Generic[T]):
    data: T
