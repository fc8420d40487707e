"""
Data models and contracts module.

Immutable data structures for orders, session slices and execution plans,
plus normalization of raw order payloads.
"""
