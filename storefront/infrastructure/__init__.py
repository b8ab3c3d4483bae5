"""Infrastructure layer: database pool and repository implementations."""
