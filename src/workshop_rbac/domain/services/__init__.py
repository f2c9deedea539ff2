"""Domain services - pure functions over entities."""
