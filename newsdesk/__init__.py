"""
Newsdesk Backend

A FastAPI backend for a news platform.
Provides article publishing, a public feed, read tracking and author analytics.
"""

__version__ = "1.0.0"
