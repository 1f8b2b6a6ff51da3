"""Core data models and world representation."""
