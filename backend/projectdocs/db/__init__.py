"""Redis access helpers."""
