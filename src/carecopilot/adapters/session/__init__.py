from .in_memory_session_store import InMemorySessionStore, SessionRegistry

__all__ = ["InMemorySessionStore", "SessionRegistry"]
