"""Codepad — virtual file system backend for the browser code playground."""

__version__ = "0.1.0"
