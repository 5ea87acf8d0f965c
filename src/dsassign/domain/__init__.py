"""Domain layer: assignment requests, dispatch engine and the ports it drives."""
