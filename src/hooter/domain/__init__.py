"""Domain layer for Hooter."""
