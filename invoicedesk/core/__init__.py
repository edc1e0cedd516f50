"""Core domain layer: entities, ports and pure services."""
