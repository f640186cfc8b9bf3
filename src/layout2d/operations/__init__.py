"""Polygon operations: boundary-tracing union and escape point."""
