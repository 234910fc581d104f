# Export all routers
from . import careers, contact, health

__all__ = ["careers", "contact", "health"]
