"""Core domain logic: content graph, TV resolution and navigation."""
