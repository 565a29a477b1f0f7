"""
GitHub API client for making authenticated requests scoped to one repository.

Every response is classified into a RemoteOutcome so callers never inspect
HTTP status codes directly.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional
from urllib.parse import quote

import httpx

from gitkvdb.config.config import (
    GITHUB_API_CONNECT_TIMEOUT,
    GITHUB_API_TIMEOUT,
    GITHUB_API_URL,
    GITHUB_API_VERSION,
)
from gitkvdb.exception.exceptions import RemoteError
from gitkvdb.services.github.models.types import ApiResult, RemoteOutcome

logger = logging.getLogger(__name__)

ALREADY_EXISTS_STATUS = 422
ALREADY_EXISTS_MARKER = "already exists"


def quote_path(value: str) -> str:
    """Percent-encode a path or ref for use in a URL, keeping slashes."""
    return quote(value, safe="/")


class GitHubAPIClient:
    """Client for GitHub API interactions against a single repository."""

    def __init__(
        self,
        token: Optional[str],
        owner: str,
        repo: str,
        base_url: str = GITHUB_API_URL,
        timeout: float = GITHUB_API_TIMEOUT,
    ):
        """Initialize GitHub API client.

        Args:
            token: Bearer credential (personal access token)
            owner: Repository owner
            repo: Repository name
            base_url: API base URL
            timeout: Request timeout in seconds
        """
        self.token = token
        self.owner = owner
        self.repo = repo
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        if not token:
            logger.warning("GitHub API client initialized without a token - authentication may fail")

    @property
    def repo_path(self) -> str:
        """API path prefix for the configured repository."""
        return f"repos/{self.owner}/{self.repo}"

    def _get_headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
            "Content-Type": "application/json",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def request(
        self,
        method: str,
        path: str,
        data: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        expected_status: Iterable[int] = (200,),
    ) -> ApiResult:
        """Make a GitHub API request.

        Args:
            method: HTTP method (GET, POST, PATCH, DELETE)
            path: API path (without base URL)
            data: Request body data
            params: Query parameters
            expected_status: Status codes that count as success

        Returns:
            Classified ApiResult

        Raises:
            RemoteError: If the request could not be sent or no response arrived
        """
        url = f"{self.base_url}/{path}"
        headers = self._get_headers()

        try:
            timeout_config = httpx.Timeout(self.timeout, connect=GITHUB_API_CONNECT_TIMEOUT)
            response = await self._execute_http_request(
                method, url, headers, data, params, timeout_config
            )
        except httpx.RequestError as e:
            error_msg = f"GitHub API request error: {e}"
            logger.error(error_msg)
            raise RemoteError(error_msg, original=e) from e

        return self._process_response(response, method, url, tuple(expected_status))

    async def _execute_http_request(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        data: Optional[Dict[str, Any]],
        params: Optional[Dict[str, Any]],
        timeout_config: httpx.Timeout,
    ) -> httpx.Response:
        """Execute HTTP request with method routing.

        Raises:
            ValueError: If HTTP method is unsupported
        """
        method_upper = method.upper()

        async with httpx.AsyncClient(timeout=timeout_config, trust_env=False) as client:
            if method_upper == "GET":
                return await client.get(url, headers=headers, params=params)
            elif method_upper == "POST":
                return await client.post(url, json=data, headers=headers, params=params)
            elif method_upper == "PATCH":
                return await client.patch(url, json=data, headers=headers, params=params)
            elif method_upper == "DELETE":
                return await client.delete(url, headers=headers, params=params)
            else:
                raise ValueError(f"Unsupported HTTP method: {method}")

    def _process_response(
        self,
        response: httpx.Response,
        method: str,
        url: str,
        expected_status: tuple,
    ) -> ApiResult:
        """Classify an HTTP response into success, already-exists or failure."""
        status = response.status_code
        payload = self._parse_body(response)

        if status in expected_status:
            logger.debug(f"GitHub API {method} request to {url} successful (status: {status})")
            return ApiResult(RemoteOutcome.SUCCESS, status, payload)

        message = self._error_message(payload, response)
        if status == ALREADY_EXISTS_STATUS and ALREADY_EXISTS_MARKER in message.lower():
            logger.warning(f"GitHub API {method} request to {url}: {message}")
            return ApiResult(RemoteOutcome.ALREADY_EXISTS, status, payload, message)

        logger.error(f"GitHub API request failed (status {status}): {message}")
        return ApiResult(RemoteOutcome.FAILURE, status, payload, message)

    @staticmethod
    def _parse_body(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None

    @staticmethod
    def _error_message(payload: Any, response: httpx.Response) -> str:
        """Collect the top-level and per-field error messages GitHub returns."""
        if not isinstance(payload, dict):
            return response.text or f"HTTP {response.status_code}"

        messages: List[str] = []
        if payload.get("message"):
            messages.append(str(payload["message"]))
        for error in payload.get("errors") or []:
            if isinstance(error, dict) and error.get("message"):
                messages.append(str(error["message"]))
            elif isinstance(error, str):
                messages.append(error)
        return ": ".join(messages) or f"HTTP {response.status_code}"

    async def get(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        expected_status: Iterable[int] = (200,),
    ) -> ApiResult:
        return await self.request("GET", path, params=params, expected_status=expected_status)

    async def post(
        self,
        path: str,
        data: Optional[Dict[str, Any]] = None,
        expected_status: Iterable[int] = (201,),
    ) -> ApiResult:
        return await self.request("POST", path, data=data, expected_status=expected_status)

    async def patch(
        self,
        path: str,
        data: Optional[Dict[str, Any]] = None,
        expected_status: Iterable[int] = (200,),
    ) -> ApiResult:
        return await self.request("PATCH", path, data=data, expected_status=expected_status)

    async def delete(self, path: str, expected_status: Iterable[int] = (204,)) -> ApiResult:
        return await self.request("DELETE", path, expected_status=expected_status)


def raise_for_result(result: ApiResult, action: str) -> ApiResult:
    """Raise RemoteError unless the result is a success.

    Args:
        result: Classified API result
        action: Human readable description of the attempted operation

    Returns:
        The same result, for chaining
    """
    if not result.ok:
        raise RemoteError(
            f"Failed to {action}: {result.message or f'HTTP {result.status_code}'}",
            status_code=result.status_code,
        )
    return result
