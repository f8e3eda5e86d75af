"""Application wiring for mlssync (configuration)."""
