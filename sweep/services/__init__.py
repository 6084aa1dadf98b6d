"""Service layer: operations composed from core types and the platform layer."""
