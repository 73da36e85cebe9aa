"""Stored-source transforms."""

from .source_transforms import IdentityTransform, ReverseTransform, get_source_transform

__all__ = ["IdentityTransform", "ReverseTransform", "get_source_transform"]
