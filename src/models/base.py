"""Declarative base shared by every ORM model."""

from __future__ import annotations

from uuid import uuid4

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


def new_id() -> str:
    """Primary-key default matching the store's uuid identifiers."""
    return str(uuid4())
