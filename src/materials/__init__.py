"""Surface and volume materials and the textures they sample."""
