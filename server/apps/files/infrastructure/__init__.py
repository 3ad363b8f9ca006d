"""Infrastructure layer for files app.

This package contains integrations with external systems:
- Local filesystem storage of file content
- Metadata helpers (MIME type, storage names, payload decoding)
- Job dispatch to the thumbnail generation worker

Keep infrastructure concerns separate from business logic.
"""
