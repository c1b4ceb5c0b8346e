"""
Core utilities shared across the EspressoLab store.

This package hosts configuration helpers (env vars, data paths, backing mode)
so that the db and repository layers do not read os.environ directly.
"""
