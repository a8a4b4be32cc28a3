"""Shared domain components - Generic patterns and utilities."""

from app.domains.shared.repository import GenericRepository

__all__ = ["GenericRepository"]
