"""
Registry of projection names constructed during a run.

Every projection registers its name when it is constructed. The first
construction of a name (compared case-insensitively) appends it and assigns
the next integer id; later constructions reuse that id. Entries are never
removed for the life of the registry.
"""

import logging
import threading
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


class ProjectionRegistry:
    """
    Append-only, thread-safe table of projection names and ids.

    Ids start at 0 and increase by one for each distinct name.
    """

    def __init__(self) -> None:
        self._names: List[str] = []
        self._ids: Dict[str, int] = {}
        self._lock = threading.Lock()

    def register(self, name: str) -> int:
        """
        Return the id for a projection name, assigning one if needed.

        Args:
            name: Projection name (case-insensitive)

        Returns:
            Integer id for the name
        """
        key = name.casefold()
        with self._lock:
            projection_id = self._ids.get(key)
            if projection_id is None:
                projection_id = len(self._names)
                self._names.append(name)
                self._ids[key] = projection_id
                logger.debug(f'Registered projection "{name}" as {projection_id}')
            return projection_id

    def lookup(self, name: str) -> Optional[int]:
        """
        Return the id for a registered name, or None.

        Args:
            name: Projection name (case-insensitive)
        """
        with self._lock:
            return self._ids.get(name.casefold())

    def names(self) -> List[str]:
        """Names registered so far, in id order, as first spelled."""
        with self._lock:
            return list(self._names)

    def __len__(self) -> int:
        with self._lock:
            return len(self._names)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.lookup(name) is not None


# Process-wide registry used when a projection is not given one explicitly
projection_registry = ProjectionRegistry()
