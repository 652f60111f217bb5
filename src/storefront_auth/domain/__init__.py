"""Domain layer: entities, enums, value objects and ports (no frameworks)."""
