"""Domain layer: export and transaction model, errors, events and ports.

Nothing in this package performs I/O. Infrastructure adapters implement the
protocols declared in `domain.protocols`.
"""
