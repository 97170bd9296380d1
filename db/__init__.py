"""
db/ - Database Layer
====================
Owns the PostgreSQL connection pool and the `books` schema.
Repositories borrow connections from here; nothing above this layer
opens a connection directly.
"""
