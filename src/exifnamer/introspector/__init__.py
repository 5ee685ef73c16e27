"""Metadata extraction through exiftool."""

from exifnamer.introspector.exiftool import ExifToolError, ExifToolRunner

__all__ = ["ExifToolError", "ExifToolRunner"]
