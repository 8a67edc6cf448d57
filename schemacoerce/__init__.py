"""JSON Schema node model, path queries, validation and schema-to-schema coercions."""

__version__ = "0.1.0"

__all__ = ["query", "schema", "compiled", "coercion"]