"""Boundary adapters: database and AWS SDK clients."""
