"""Base loader interface for the identity provider."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..models.migration import PasswordHasher
from ..models.record import MigrationResult, UserRecord


class BaseLoader(ABC):
    """
    Base class for user loaders.

    Loaders create, list and delete users in the target identity provider.
    Create and delete never raise for provider-side errors: the outcome,
    including the HTTP status, is returned as a MigrationResult so the
    caller decides whether to retry, skip or abort.
    """

    def __init__(
        self,
        target_service: str,
        api_key: Optional[str] = None,
        dry_run: bool = False
    ):
        """
        Initialize the loader.

        Args:
            target_service: Name of the target service
            api_key: API key for authentication
            dry_run: If True, simulate without making changes
        """
        self.target_service = target_service
        self.api_key = api_key
        self.dry_run = dry_run

    @abstractmethod
    def create_user(
        self,
        user: UserRecord,
        password_hasher: PasswordHasher
    ) -> MigrationResult:
        """
        Create a single user in the target service.

        Args:
            user: Validated user record
            password_hasher: Algorithm of ``user.password``, if present

        Returns:
            MigrationResult indicating success/failure
        """
        pass

    @abstractmethod
    def delete_user(self, user_id: str) -> MigrationResult:
        """
        Delete a user from the target service.

        Args:
            user_id: Provider-side user ID

        Returns:
            MigrationResult indicating success/failure
        """
        pass

    @abstractmethod
    def list_users(self) -> List[Dict[str, Any]]:
        """
        List every user in the target service.

        Raises:
            ProviderError: if the provider refuses the request
        """
        pass
