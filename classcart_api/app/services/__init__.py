"""
Service layer abstraction.

Each service encapsulates business logic for a domain and receives
the ``DataStore`` it works against when constructed, so API handlers
never touch the database directly.
"""
