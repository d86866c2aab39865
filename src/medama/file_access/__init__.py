"""
Local file access for building file records.
"""

from .local_accessor import FileSystemAccessor

__all__ = ["FileSystemAccessor"]
