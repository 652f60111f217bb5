"""Infrastructure layer: adapters for persistence, security and logging."""
