"""
Cross-cutting pieces of the portfolio API: settings, the asyncpg pool,
logging setup, exception handlers and pagination.

Experience SQL and request handling stay in `experiences/`.
"""
