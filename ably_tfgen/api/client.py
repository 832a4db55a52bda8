"""
Control API Client - HTTP client for the Ably Control API.

Public API:
    ControlApiClient: synchronous client listing an account's apps and the
        keys, namespaces, queues and rules of each app
"""

import logging
from typing import Any, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from ..config_manager import ControlApiConfig
from ..exceptions import AuthenticationError, ResourceFetchError, ResourceParseError
from ..models import ApiKey, App, Namespace, Queue, Rule

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _decode_payload(response: httpx.Response) -> Any:
    """Decoded error body of a failed response, or its raw text."""
    try:
        return response.json()
    except ValueError:
        return response.text or None


class ControlApiClient:
    """
    HTTP client for the Ably Control API.

    Every request carries the account token as a bearer credential. Failures
    are raised as ControlApiError subclasses carrying the HTTP status and the
    error body returned by the API.

    Usage:
        with ControlApiClient(config.control_api) as client:
            account_id = client.resolve_account_id()
            apps = client.list_apps(account_id)
    """

    def __init__(
        self,
        config: ControlApiConfig,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            config: Control API connection settings
            transport: Optional httpx transport (tests pass httpx.MockTransport)
        """
        self.config = config
        self.base_url = config.base_url.rstrip("/")
        self._http_client = httpx.Client(
            base_url=self.base_url,
            timeout=httpx.Timeout(config.timeout),
            headers={
                "Authorization": f"Bearer {config.token}",
                "Content-Type": "application/json",
            },
            transport=transport,
        )

    def __enter__(self) -> "ControlApiClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        self._http_client.close()

    def resolve_account_id(self) -> str:
        """
        Look up the account the token belongs to.

        Returns:
            Account identifier

        Raises:
            AuthenticationError: If the token is rejected or /me has no account
        """
        try:
            response = self._http_client.get("/me")
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as e:
            raise AuthenticationError(
                f"Failed to resolve account: HTTP {e.response.status_code}",
                status_code=e.response.status_code,
                payload=_decode_payload(e.response),
                cause=e,
            ) from e
        except httpx.RequestError as e:
            raise AuthenticationError(
                f"Failed to reach the Control API at {self.base_url}", cause=e
            ) from e
        except ValueError as e:
            raise AuthenticationError(
                "Control API returned a non-JSON body for /me", cause=e
            ) from e

        account = body.get("account") if isinstance(body, dict) else None
        account_id = account.get("id") if isinstance(account, dict) else None
        if not account_id:
            raise AuthenticationError(
                "Control API response for /me has no account id", payload=body
            )

        logger.debug(f"Resolved account id {account_id}")
        return str(account_id)

    def list_apps(self, account_id: str) -> List[App]:
        return self._list(f"/accounts/{account_id}/apps", App, "apps")

    def list_keys(self, app_id: str) -> List[ApiKey]:
        return self._list(f"/apps/{app_id}/keys", ApiKey, "keys", app_id)

    def list_namespaces(self, app_id: str) -> List[Namespace]:
        return self._list(f"/apps/{app_id}/namespaces", Namespace, "namespaces", app_id)

    def list_queues(self, app_id: str) -> List[Queue]:
        return self._list(f"/apps/{app_id}/queues", Queue, "queues", app_id)

    def list_rules(self, app_id: str) -> List[Rule]:
        return self._list(f"/apps/{app_id}/rules", Rule, "rules", app_id)

    def _get(self, path: str, resource_type: str, app_id: Optional[str] = None) -> Any:
        try:
            response = self._http_client.get(path)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ResourceFetchError(
                f"Failed to fetch {resource_type}: HTTP {e.response.status_code}",
                resource_type=resource_type,
                app_id=app_id,
                status_code=e.response.status_code,
                payload=_decode_payload(e.response),
                cause=e,
            ) from e
        except httpx.RequestError as e:
            raise ResourceFetchError(
                f"Failed to fetch {resource_type}: {e.__class__.__name__}",
                resource_type=resource_type,
                app_id=app_id,
                cause=e,
            ) from e

        try:
            return response.json()
        except ValueError as e:
            raise ResourceParseError(
                f"Control API returned a non-JSON body for {resource_type}",
                resource_type=resource_type,
                app_id=app_id,
                payload=response.text,
                cause=e,
            ) from e

    def _list(
        self,
        path: str,
        model: Type[ModelT],
        resource_type: str,
        app_id: Optional[str] = None,
    ) -> List[ModelT]:
        body = self._get(path, resource_type, app_id)
        try:
            records = TypeAdapter(List[model]).validate_python(body)  # type: ignore[valid-type]
        except ValidationError as e:
            raise ResourceParseError(
                f"Unexpected {resource_type} payload: {e.error_count()} validation error(s)",
                resource_type=resource_type,
                app_id=app_id,
                payload=body,
                cause=e,
            ) from e

        logger.debug(f"Fetched {len(records)} {resource_type} from {path}")
        return records
