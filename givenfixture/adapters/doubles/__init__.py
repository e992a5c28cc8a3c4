"""Collaborator double provider adapters."""

from .automock import AutoMockDouble, AutoMockProvider

__all__ = ["AutoMockDouble", "AutoMockProvider"]
