"""Business logic layer for authentication app.

- Session tokens kept in the key-value store
- Resolution of the caller from a token or HTTP Basic credentials
"""
