"""
Bragging Rights Leaderboard API Package.

This package contains the HTTP layer:
- server: FastAPI app exposing GET /api/leaderboard
"""

__version__ = "1.0.0"
