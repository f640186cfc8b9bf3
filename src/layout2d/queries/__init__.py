"""Read-only geometric queries."""
