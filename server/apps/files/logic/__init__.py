"""Business logic layer for files app.

This package contains all business logic for file nodes:
- Parent references (root sentinel or folder id)
- Creation, lookup and paginated listing
- Visibility changes and content retrieval authorization

All business logic should be implemented here, separate from
models (data layer), views and infrastructure (external systems).
"""
