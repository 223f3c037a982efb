"""Shared data model primitives."""

from trendscore.data_model.base import StrictBaseModel


__all__ = ["StrictBaseModel"]
