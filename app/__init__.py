"""Event management API with realtime notification delivery."""
