"""
Lark Open API client for larkdown.

This module handles authentication and the handful of Open API calls larkdown
needs: listing a document's blocks and resolving drive media.
"""

import logging
import time
from typing import Any, Dict, Iterator, Optional, Tuple

import httpx

from .config import config
from .errors import LarkAPIError

# Refresh the tenant token this many seconds before Lark says it expires
TOKEN_EXPIRY_MARGIN = 60


class LarkClient:
    """
    Manages communication with the Lark Open API.
    """

    def __init__(self, app_id: Optional[str] = None, app_secret: Optional[str] = None,
                 base_url: Optional[str] = None, timeout: Optional[float] = None,
                 transport: Optional[httpx.BaseTransport] = None):
        """
        Initialize the client.

        Args:
            app_id: Lark app id (defaults to config value)
            app_secret: Lark app secret (defaults to config value)
            base_url: Open API host (defaults to config value)
            timeout: Request timeout in seconds (defaults to config value)
            transport: Optional httpx transport, e.g. for testing
        """
        self.app_id = app_id or config.lark_app_id
        self.app_secret = app_secret or config.lark_app_secret
        self.base_url = (base_url or config.lark_base_url).rstrip("/")
        self.client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout or config.lark_timeout,
            transport=transport,
        )
        self._token: Optional[str] = None
        self._token_expires_at = 0.0

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()

    def close(self) -> None:
        self.client.close()

    def tenant_access_token(self) -> str:
        """
        Get a tenant access token, requesting a new one when needed.

        Returns:
            The token

        Raises:
            LarkAPIError: If credentials are missing or the request fails
        """
        if self._token and time.monotonic() < self._token_expires_at:
            return self._token

        if not self.app_id or not self.app_secret:
            raise LarkAPIError("Lark app_id and app_secret are required")

        data = self._send(
            "POST",
            "/open-apis/auth/v3/tenant_access_token/internal",
            json={"app_id": self.app_id, "app_secret": self.app_secret},
        )
        self._token = data.get("tenant_access_token")
        if not self._token:
            raise LarkAPIError("Lark did not return a tenant_access_token")

        expire = int(data.get("expire") or 0)
        self._token_expires_at = time.monotonic() + max(expire - TOKEN_EXPIRY_MARGIN, 0)
        logging.info("Obtained Lark tenant access token")
        return self._token

    def _send(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        """Send a request and return the decoded JSON body, checking Lark's error code."""
        try:
            response = self.client.request(method, path, **kwargs)
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as e:
            raise LarkAPIError(f"Lark request {method} {path} failed: {e}",
                               code=e.response.status_code) from e
        except httpx.RequestError as e:
            raise LarkAPIError(f"Failed to connect to Lark: {e}") from e
        except ValueError as e:
            raise LarkAPIError(f"Lark returned invalid JSON for {method} {path}: {e}") from e

        code = body.get("code", 0)
        if code != 0:
            raise LarkAPIError(f"Lark request {method} {path} failed: {body.get('msg', '')} (code {code})",
                               code=code)
        return body

    def _auth_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.tenant_access_token()}"}

    def request_json(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        """
        Make an authenticated request and return the response's ``data`` object.

        Args:
            method: HTTP method
            path: Open API path
            **kwargs: Passed through to httpx

        Returns:
            The ``data`` member of the response body

        Raises:
            LarkAPIError: If the request fails or Lark reports an error
        """
        body = self._send(method, path, headers=self._auth_headers(), **kwargs)
        return body.get("data") or {}

    def list_document_blocks(self, document_id: str, page_size: int = 500) -> Iterator[Dict[str, Any]]:
        """
        Iterate over every block of a docx document, following pagination.

        Args:
            document_id: The docx document token
            page_size: Blocks per page (Lark allows at most 500)

        Yields:
            Raw block dictionaries in document order
        """
        page_token: Optional[str] = None
        page = 0
        while True:
            params: Dict[str, Any] = {"page_size": page_size, "document_revision_id": -1}
            if page_token:
                params["page_token"] = page_token

            data = self.request_json("GET", f"/open-apis/docx/v1/documents/{document_id}/blocks",
                                     params=params)
            page += 1
            items = data.get("items") or []
            logging.debug(f"Fetched page {page} of document {document_id}: {len(items)} blocks")
            yield from items

            page_token = data.get("page_token")
            if not data.get("has_more") or not page_token:
                return

    def get_tmp_download_url(self, file_token: str) -> str:
        """
        Get a temporary download URL for a drive media file.

        Args:
            file_token: The media token

        Returns:
            The temporary URL
        """
        data = self.request_json("GET", "/open-apis/drive/v1/medias/batch_get_tmp_download_url",
                                 params={"file_tokens": file_token})
        for entry in data.get("tmp_download_urls") or []:
            if entry.get("file_token") == file_token and entry.get("tmp_download_url"):
                return entry["tmp_download_url"]
        raise LarkAPIError(f"Lark returned no download URL for media {file_token}")

    def download_media(self, file_token: str) -> Tuple[bytes, Optional[str]]:
        """
        Download a drive media file.

        Args:
            file_token: The media token

        Returns:
            The file content and its content type, if reported
        """
        path = f"/open-apis/drive/v1/medias/{file_token}/download"
        try:
            response = self.client.get(path, headers=self._auth_headers())
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise LarkAPIError(f"Downloading media {file_token} failed: {e}",
                               code=e.response.status_code) from e
        except httpx.RequestError as e:
            raise LarkAPIError(f"Failed to connect to Lark: {e}") from e

        content_type = response.headers.get("content-type")
        return response.content, content_type
