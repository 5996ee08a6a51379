"""
Job Board
Job seekers search and apply to postings; employers create companies,
post jobs and review applicants.

Architecture:
- FastAPI REST API under /api
- In-memory storage engine injected per app instance
- httpx client with a persisted session cache (jobboard.client)
"""

__version__ = "1.0.0"
