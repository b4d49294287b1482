"""Infrastructure layer — concrete clients.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
"""

from clikit.infra.memory_cache import MemoryCacheClient

__all__: list[str] = ["MemoryCacheClient"]
