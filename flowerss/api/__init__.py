from . import subscriptions

__all__ = ["subscriptions"]
