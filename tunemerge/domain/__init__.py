"""Domain layer: entities, errors and pure merge operations."""
