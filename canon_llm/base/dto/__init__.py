"""Pydantic DTOs validating input at the package edge."""

from .request_options import RequestOptions

__all__ = ["RequestOptions"]
