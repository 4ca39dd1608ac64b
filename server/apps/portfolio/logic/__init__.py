"""Business logic layer for portfolio app.

This package contains all business logic for the content hierarchy:
- Object path derivation
- Subject catalog (create, list, cascading delete)
- File registry (upload, rename, delete, preview, listing)

Operations that touch both stores order their calls so that a partial
failure leaves an orphan object rather than a row pointing at nothing.
"""
