"""Intersectable scene objects and the bounding volume hierarchy."""
