"""Resource types, validation and status conditions for service bindings."""

__version__ = "0.1.0"

__all__ = ["apis", "bindings", "duck", "labs", "labsinternal", "meta"]