"""Infrastructure layer for portfolio app.

This package contains integrations with external systems:
- Object storage backend (S3/MinIO/Supabase Storage)
- Metadata helpers (MIME type, filename sanitizing, sizes)

Keep infrastructure concerns separate from business logic.
"""
