"""UI view models."""
