"""Core scanning, stripping and line filtering."""
