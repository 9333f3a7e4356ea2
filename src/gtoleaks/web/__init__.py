"""ASGI application wiring."""
