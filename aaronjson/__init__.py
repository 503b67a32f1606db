"""A small JSON parser with a typed value tree, marshalling and unmarshalling."""

__version__ = "0.1.0"

__all__ = ["containers", "errors", "marshal", "parse", "values"]