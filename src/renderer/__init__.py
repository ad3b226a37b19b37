"""Light-transport integrator, image renderer and PNG output."""
