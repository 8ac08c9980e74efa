"""User administration client built on the request gateway."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar
from urllib.parse import quote

from portal_service_libs.logging_utils import create_service_logger
from pydantic import BaseModel, ValidationError

from services.portal_api_client.dto.portal_v1 import UsersResponseV1, UserV1
from services.portal_api_client.exceptions import ApiRequestError, UserServiceError
from services.portal_api_client.protocols import ApiClientProtocol

logger = create_service_logger("portal_api_client.user_client")

ModelT = TypeVar("ModelT", bound=BaseModel)


class UserServiceImpl:
    """User listing, lookup, update, delete and search."""

    def __init__(self, api_client: ApiClientProtocol) -> None:
        self._api = api_client

    async def _get(self, path: str, failure: str) -> Any:
        try:
            return await self._api.request(path)
        except ApiRequestError as exc:
            logger.warning(
                failure,
                extra={"path": path, "status": exc.status_code, "reason": exc.message},
            )
            raise UserServiceError(failure, exc.status_code) from exc

    def _parse(self, model: type[ModelT], data: Any, failure: str) -> ModelT:
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            logger.warning(failure, extra={"model": model.__name__, "errors": exc.error_count()})
            raise UserServiceError(failure) from exc

    async def get_all_users(self, page: int = 1, limit: int = 10) -> UsersResponseV1:
        """Fetch one page of users.

        Raises:
            UserServiceError: The backend rejected the listing
        """
        data = await self._get(f"/users?page={page}&limit={limit}", "Failed to fetch users")
        return self._parse(UsersResponseV1, data, "Failed to fetch users")

    async def get_user_by_id(self, user_id: int) -> UserV1:
        data = await self._get(f"/users/{user_id}", "Failed to fetch user")
        return self._parse(UserV1, data, "Failed to fetch user")

    async def update_user(self, user_id: int, changes: Mapping[str, Any]) -> UserV1:
        """Apply a partial update; ``changes`` uses the backend's camelCase keys."""
        response = await self._api.request(
            f"/users/{user_id}", {"method": "PUT", "body": dict(changes)}
        )
        if not response.ok:
            raise UserServiceError("Failed to update user", response.status)
        return self._parse(UserV1, response.json(), "Failed to update user")

    async def delete_user(self, user_id: int) -> None:
        response = await self._api.request(f"/users/{user_id}", {"method": "DELETE"})
        if not response.ok:
            raise UserServiceError("Failed to delete user", response.status)
        logger.info("Deleted user", extra={"user_id": user_id})

    async def search_users(self, query: str) -> list[UserV1]:
        data = await self._get(
            f"/users/search?q={quote(query, safe='')}", "Failed to search users"
        )
        return [self._parse(UserV1, item, "Failed to search users") for item in data or []]
