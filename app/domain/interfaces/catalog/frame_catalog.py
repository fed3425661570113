"""Frame catalog interface."""
from abc import ABC, abstractmethod
from typing import List, Optional

from ...entities.frame import FrameProduct


class FrameCatalog(ABC):
    """Read-only access to the frame catalog consumed by the matcher."""

    @abstractmethod
    async def fetch_active_catalog(self) -> List[FrameProduct]:
        """
        Fetch every active frame.

        Returns:
            Active frames in ingestion order. The order is the final tie-break
            of the matcher, so implementations must return it deterministically.

        Raises:
            CatalogError: If the catalog store cannot be read
        """
        pass

    @abstractmethod
    async def fetch_by_id(self, frame_id: str) -> Optional[FrameProduct]:
        """
        Fetch a single frame regardless of its active flag.

        Args:
            frame_id: Opaque catalog identifier

        Returns:
            The frame, or None if no frame has this id
        """
        pass
