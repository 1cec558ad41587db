"""Domain shapes (entities) and pure query helpers (search, sort, pagination)."""
