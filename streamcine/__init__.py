"""StreamCine catalog addon service."""
