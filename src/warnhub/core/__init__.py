"""Core model: issues, tool run registry, aggregation."""
