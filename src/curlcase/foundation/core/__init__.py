"""Core tool abstractions."""

from .base import BaseTool, ToolMetadata, TParams

__all__ = ["BaseTool", "ToolMetadata", "TParams"]
