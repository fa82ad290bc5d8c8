"""
SQLAlchemy declarative base shared by the location and shipping models.

Kept apart from database.py so models (and the test suite) can import Base
without building the asyncpg engine.
"""
from sqlalchemy.ext.asyncio import AsyncAttrs
from sqlalchemy.orm import DeclarativeBase


class Base(AsyncAttrs, DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass
