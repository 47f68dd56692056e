"""API route modules, registered explicitly by the application factory."""
