"""Clerk Backend API loader."""

import logging
import requests
from typing import Any, Dict, List, Optional
from datetime import datetime, timezone

from .base import BaseLoader
from ..config import DEFAULT_API_URL
from ..exceptions import ProviderError
from ..models.migration import PasswordHasher
from ..models.record import MigrationResult, UserRecord

logger = logging.getLogger(__name__)


class ClerkLoader(BaseLoader):
    """
    Loader for the Clerk Backend API.

    Handles:
    - Creating users with an imported password digest, or with the
      password requirement waived
    - Listing users page by page
    - Deleting users
    """

    PAGE_SIZE = 100

    def __init__(
        self,
        secret_key: str,
        base_url: str = DEFAULT_API_URL,
        dry_run: bool = False,
        timeout: float = 30.0
    ):
        """
        Initialize the Clerk loader.

        Args:
            secret_key: Clerk secret key (sk_live_... or sk_test_...)
            base_url: Base URL of the Backend API
            dry_run: If True, simulate without making changes
            timeout: Per-request timeout in seconds
        """
        super().__init__("clerk", secret_key, dry_run)
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = self._create_session()

    def _create_session(self) -> requests.Session:
        """Create a requests session with authentication."""
        session = requests.Session()
        session.headers["Authorization"] = f"Bearer {self.api_key}"
        session.headers["Content-Type"] = "application/json"
        return session

    def build_create_payload(
        self,
        user: UserRecord,
        password_hasher: PasswordHasher
    ) -> Dict[str, Any]:
        """Build the create-user request body."""
        payload: Dict[str, Any] = {
            "external_id": user.user_id,
            "email_address": [user.email],
            "first_name": user.first_name,
            "last_name": user.last_name,
            "phone_number": user.phone_number,
        }

        if user.has_password:
            payload["password_digest"] = user.password
            payload["password_hasher"] = password_hasher.value
        else:
            payload["skip_password_requirement"] = True

        return {k: v for k, v in payload.items() if v is not None}

    def create_user(
        self,
        user: UserRecord,
        password_hasher: PasswordHasher
    ) -> MigrationResult:
        """Create a single user."""
        if self.dry_run:
            return MigrationResult(
                record_id=user.user_id,
                target_id=user.user_id,
                success=True,
                loaded_at=datetime.now(timezone.utc),
            )

        payload = self.build_create_payload(user, password_hasher)

        try:
            response = self._session.post(
                f"{self.base_url}/users", json=payload, timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Request failed for user {user.user_id}: {e}")
            return MigrationResult(record_id=user.user_id, success=False, error=str(e))

        if not response.ok:
            return self._error_result(user.user_id, response)

        response_data = self._json_body(response)
        return MigrationResult(
            record_id=user.user_id,
            target_id=response_data.get("id"),
            success=True,
            status_code=response.status_code,
            response_data=response_data,
            loaded_at=datetime.now(timezone.utc),
        )

    def delete_user(self, user_id: str) -> MigrationResult:
        """Delete a user by Clerk ID."""
        if self.dry_run:
            return MigrationResult(record_id=user_id, target_id=user_id, success=True)

        try:
            response = self._session.delete(
                f"{self.base_url}/users/{user_id}", timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Failed to delete user {user_id}: {e}")
            return MigrationResult(record_id=user_id, success=False, error=str(e))

        if not response.ok:
            return self._error_result(user_id, response)

        return MigrationResult(
            record_id=user_id,
            target_id=user_id,
            success=True,
            status_code=response.status_code,
            response_data=self._json_body(response),
        )

    def list_users(self) -> List[Dict[str, Any]]:
        """List all users, following limit/offset pagination."""
        users: List[Dict[str, Any]] = []
        offset = 0

        while True:
            try:
                response = self._session.get(
                    f"{self.base_url}/users",
                    params={"limit": self.PAGE_SIZE, "offset": offset},
                    timeout=self.timeout,
                )
            except requests.exceptions.RequestException as e:
                raise ProviderError(f"Listing users failed: {e}") from e

            if not response.ok:
                result = self._error_result(None, response)
                raise ProviderError(
                    f"Listing users failed: {result.error}",
                    status_code=result.status_code,
                    errors=result.errors,
                    trace_id=result.trace_id,
                )

            page = response.json()
            users.extend(page)
            logger.debug(f"Fetched {len(page)} users at offset {offset}")

            if len(page) < self.PAGE_SIZE:
                break
            offset += len(page)

        return users

    def _json_body(self, response: requests.Response) -> Dict[str, Any]:
        if not response.text:
            return {}
        try:
            data = response.json()
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {"data": data}

    def _error_result(
        self,
        record_id: Optional[str],
        response: requests.Response
    ) -> MigrationResult:
        """Turn an error response into a failed MigrationResult."""
        body = self._json_body(response)
        errors = body.get("errors") or []
        if errors and isinstance(errors[0], dict):
            message = errors[0].get("long_message") or errors[0].get("message")
        else:
            message = response.text or response.reason

        retry_after = None
        header = response.headers.get("Retry-After", "")
        if response.status_code == 429 and header.isdigit():
            retry_after = float(header)

        return MigrationResult(
            record_id=record_id,
            success=False,
            status_code=response.status_code,
            error=message,
            errors=errors,
            trace_id=body.get("clerk_trace_id"),
            retry_after=retry_after,
            response_data=body,
        )
