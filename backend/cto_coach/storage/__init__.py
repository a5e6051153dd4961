"""Document and chat persistence backends."""

# Import backends first to trigger registration via decorators
from cto_coach.storage import in_memory, sql
from cto_coach.storage.factory import StoreFactory

__all__ = ["StoreFactory", "in_memory", "sql"]
