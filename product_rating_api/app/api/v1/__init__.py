"""Version 1 of the Product Rating API."""
