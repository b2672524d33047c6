"""
Bragging Rights Leaderboard - Core Package

This package contains the core modules for:
- Difficulty-tag scoring and aggregation (bragging_rights.scoring)
- GitHub data ingestion (bragging_rights.ingestion)
- Dashboard view helpers (bragging_rights.view)
- Shared configuration and utilities
"""

from bragging_rights.config import *
