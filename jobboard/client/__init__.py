"""
Client module - session cache and API wrappers for front ends and scripts.
"""
from jobboard.client.api import ApiError, JobBoardClient
from jobboard.client.session import SessionStore

__all__ = ["ApiError", "JobBoardClient", "SessionStore"]
