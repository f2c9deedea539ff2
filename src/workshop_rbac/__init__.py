"""Workshop RBAC - permission resolution for the motorcycle workshop back office."""

__version__ = "0.1.0"
