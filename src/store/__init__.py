"""Storage layer.

This package writes generated artifacts and persists the fingerprint
snapshot shared between pipeline runs.
"""
