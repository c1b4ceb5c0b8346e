"""
Persistence adapters.

Callers depend on the LocalDatabase interface and receive plain attribute
maps; ORM records never leave this package.
"""
