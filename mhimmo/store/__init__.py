"""In-memory data store for maintaining entity relationships."""

from mhimmo.store.rental import COLLECTIONS, RentalDataStore, new_id

__all__ = ["COLLECTIONS", "RentalDataStore", "new_id"]
