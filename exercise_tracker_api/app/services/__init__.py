"""
Service layer abstraction.

Each service encapsulates business logic for a domain.  Services take
the database handle as their first argument so API handlers never
touch SQL directly.
"""
