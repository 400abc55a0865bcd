"""Repository layer: read-only DB access helpers (SQLite).

Keep functions thin and focused, so services avoid SQL strings.
"""
