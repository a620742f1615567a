"""Routes package for FastAPI endpoints.

This package contains all API route modules for the survey workspace service.
"""

from app.routes import health, surveys, teams

__all__ = ["health", "surveys", "teams"]
