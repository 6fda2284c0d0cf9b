from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar
import logging

# Type variables for generics
T = TypeVar('T')  # Generic type for raw data
R = TypeVar('R')  # Generic type for normalized/return data

logger = logging.getLogger(__name__)


class ExternalAPIAdaptorInterface(Generic[T, R], ABC):
    """
    Abstract base interface for external site adaptors.

    An adaptor fetches a raw resource from an outside system and normalizes
    it into a domain object.

    Type Parameters:
        T: The type of data received from the external site
        R: The type of normalized data returned after processing
    """

    @abstractmethod
    async def fetch(self, resource_id: str, **kwargs) -> Optional[T]:
        """
        Retrieves raw data from the external site.

        Args:
            resource_id: Identifier of the resource to fetch.
            **kwargs: Additional keyword arguments to customize the request.

        Returns:
            Optional[T]: The raw data, or None if the site has no such resource.

        Raises:
            IntegrationException: If the site cannot be reached.
        """
        pass

    @abstractmethod
    def normalize(self, data: T, resource_id: str) -> Optional[R]:
        """
        Converts raw site data to the internal format.

        Args:
            data: The raw data from the external site.
            resource_id: Identifier the data was fetched for.

        Returns:
            Optional[R]: The normalized data, or None if required fields are missing.
        """
        pass

    async def fetch_and_normalize(self, resource_id: str, **kwargs) -> Optional[R]:
        """
        Convenience method that fetches data and normalizes it in one operation.

        Returns:
            Optional[R]: The normalized data, or None when not found.

        Raises:
            IntegrationException: If the site cannot be reached.
        """
        data = await self.fetch(resource_id, **kwargs)
        if data is None:
            return None
        return self.normalize(data, resource_id)
