"""
Core infrastructure: configuration, logging, database access, HTTP
middleware, presentation helpers and the shared error taxonomy.
"""
