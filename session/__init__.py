"""Session persistence: flat text files holding one rewrite's input and output."""

from .storage import Session, SessionError, load_session, save_session, write_session

__all__ = ["Session", "SessionError", "load_session", "save_session", "write_session"]
