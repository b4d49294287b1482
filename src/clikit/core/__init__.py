"""Core layer — tokenizing, schemas, coercion and validation.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
"""
