"""
Service layer abstraction.

Each service encapsulates business logic for a domain.  Posts are kept
in an in-memory ``EntryStore``; visited countries in SQLite.  Both go
through the same validator and raise the same errors, so API handlers
do not depend on the backing storage.
"""
