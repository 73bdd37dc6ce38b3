"""pathignore Core - Shared constants and validation.

Import specific names from submodules:
    from pathignore.core import constants
    from pathignore.core import validators
"""

from pathignore.core import constants, validators

__all__ = [
    "constants",
    "validators",
]
