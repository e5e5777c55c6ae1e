"""Infrastructure layer: adapters for external inputs."""
