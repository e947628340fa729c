from .resolver import resolve_chart

__all__ = ["resolve_chart"]
