"""exifnamer - rename media files from exiftool metadata and a filename template."""

__version__ = "0.1.0"
