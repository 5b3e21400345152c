from .session_store import SessionStore, StoreSnapshot, derive_title

__all__ = ["SessionStore", "StoreSnapshot", "derive_title"]
