"""Application layer - search use cases."""
