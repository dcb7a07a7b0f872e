from . import scales

__all__ = ["scales"]
