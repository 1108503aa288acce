"""Domain repository interfaces.

Concrete implementations live in repokit/infrastructure/ and are wired at the
application boundary.
"""

from .base import Page, Repository

__all__ = ["Page", "Repository"]
