"""Shared helpers: exif timestamps and calendar, path-safe strings, subprocesses."""
