"""
Tests for the Lark API client and media resolution, using httpx's mock transport.
"""

import json
import os
import unittest
from unittest.mock import patch

import httpx
import pytest

from larkdown.client import LarkClient
from larkdown.errors import LarkAPIError, MediaResolutionError
from larkdown.media import LarkMediaResolver, MediaFile, media_reference, save_media
from larkdown.media.lark import media_extension


class FakeLark:
    """In-memory stand-in for the Lark Open API."""

    def __init__(self):
        self.token_requests = []
        self.block_requests = []
        self.pages = {
            None: {"items": [{"block_id": "a"}, {"block_id": "b"}], "has_more": True, "page_token": "p2"},
            "p2": {"items": [{"block_id": "c"}], "has_more": False},
        }

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path == "/open-apis/auth/v3/tenant_access_token/internal":
            self.token_requests.append(json.loads(request.content))
            return httpx.Response(200, json={"code": 0, "tenant_access_token": "t-123", "expire": 7200})

        if request.headers.get("Authorization") != "Bearer t-123":
            return httpx.Response(401, json={"code": 99991663, "msg": "invalid token"})

        if path == "/open-apis/docx/v1/documents/doxcnDoc/blocks":
            self.block_requests.append(dict(request.url.params))
            page = self.pages[request.url.params.get("page_token")]
            return httpx.Response(200, json={"code": 0, "data": page})

        if path == "/open-apis/docx/v1/documents/doxcnSecret/blocks":
            return httpx.Response(200, json={"code": 1770032, "msg": "forbidden"})

        if path == "/open-apis/drive/v1/medias/batch_get_tmp_download_url":
            token = request.url.params.get("file_tokens")
            if token == "missing":
                return httpx.Response(200, json={"code": 0, "data": {"tmp_download_urls": []}})
            return httpx.Response(200, json={"code": 0, "data": {"tmp_download_urls": [
                {"file_token": token, "tmp_download_url": f"https://files.example/{token}"},
            ]}})

        if path == "/open-apis/drive/v1/medias/boxcnPng/download":
            return httpx.Response(200, content=b"\x89PNG", headers={"content-type": "image/png"})

        if path == "/open-apis/drive/v1/medias/boxcnBare/download":
            return httpx.Response(200, content=b"raw")

        return httpx.Response(404, json={"code": 404, "msg": "not found"})


class TestLarkClient(unittest.TestCase):
    """Test the Open API client against a fake server."""

    def setUp(self):
        self.fake = FakeLark()
        self.client = LarkClient(
            app_id="cli_app",
            app_secret="shh",
            base_url="https://open.feishu.cn",
            timeout=5,
            transport=httpx.MockTransport(self.fake.handler),
        )

    def tearDown(self):
        self.client.close()

    def test_token_is_requested_once(self):
        self.assertEqual(self.client.tenant_access_token(), "t-123")
        self.assertEqual(self.client.tenant_access_token(), "t-123")

        self.assertEqual(self.fake.token_requests, [{"app_id": "cli_app", "app_secret": "shh"}])

    def test_block_listing_follows_pages(self):
        items = list(self.client.list_document_blocks("doxcnDoc", page_size=2))

        self.assertEqual([item["block_id"] for item in items], ["a", "b", "c"])
        self.assertEqual(len(self.fake.block_requests), 2)
        self.assertNotIn("page_token", self.fake.block_requests[0])
        self.assertEqual(self.fake.block_requests[1]["page_token"], "p2")
        self.assertEqual(self.fake.block_requests[0]["page_size"], "2")
        self.assertEqual(len(self.fake.token_requests), 1)

    def test_lark_error_code(self):
        with self.assertRaises(LarkAPIError) as ctx:
            list(self.client.list_document_blocks("doxcnSecret"))
        self.assertEqual(ctx.exception.code, 1770032)

    def test_http_error_status(self):
        with self.assertRaises(LarkAPIError) as ctx:
            self.client.request_json("GET", "/open-apis/unknown")
        self.assertEqual(ctx.exception.code, 404)

    def test_tmp_download_url(self):
        self.assertEqual(self.client.get_tmp_download_url("boxcn1"), "https://files.example/boxcn1")
        with self.assertRaises(LarkAPIError):
            self.client.get_tmp_download_url("missing")

    def test_download_media(self):
        content, content_type = self.client.download_media("boxcnPng")
        self.assertEqual(content, b"\x89PNG")
        self.assertEqual(content_type, "image/png")

    def test_context_manager_closes(self):
        with self.client as client:
            self.assertIs(client, self.client)
        self.assertTrue(self.client.client.is_closed)


class TestClientFailures(unittest.TestCase):
    """Test failures outside the Lark business protocol."""

    def test_missing_credentials(self):
        with patch.dict(os.environ, {}, clear=True):
            client = LarkClient(base_url="https://open.feishu.cn",
                                transport=httpx.MockTransport(FakeLark().handler))
        client.app_id = ""
        client.app_secret = ""
        with self.assertRaises(LarkAPIError):
            client.tenant_access_token()
        client.close()

    def test_connection_error(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        with LarkClient(app_id="a", app_secret="b", base_url="https://open.feishu.cn",
                        transport=httpx.MockTransport(refuse)) as client:
            with self.assertRaises(LarkAPIError) as ctx:
                client.tenant_access_token()
        self.assertIsNone(ctx.exception.code)

    def test_invalid_json(self):
        def garbage(request):
            return httpx.Response(200, content=b"<html>")

        with LarkClient(app_id="a", app_secret="b", base_url="https://open.feishu.cn",
                        transport=httpx.MockTransport(garbage)) as client:
            with self.assertRaises(LarkAPIError):
                client.tenant_access_token()


class TestLarkMediaResolver(unittest.TestCase):
    """Test resolving image tokens through the client."""

    def setUp(self):
        self.client = LarkClient(app_id="cli_app", app_secret="shh", base_url="https://open.feishu.cn",
                                 transport=httpx.MockTransport(FakeLark().handler))
        self.resolver = LarkMediaResolver(self.client)

    def tearDown(self):
        self.client.close()

    def test_download_url(self):
        self.assertEqual(self.resolver.get_download_url("boxcn9"), "https://files.example/boxcn9")

    def test_download_uses_content_type(self):
        media = self.resolver.download("boxcnPng")
        self.assertEqual(media.filename, "boxcnPng.png")
        self.assertEqual(media.content, b"\x89PNG")

    def test_download_defaults_to_jpg(self):
        self.assertEqual(self.resolver.download("boxcnBare").filename, "boxcnBare.jpg")

    def test_errors_become_media_errors(self):
        with self.assertRaises(MediaResolutionError):
            self.resolver.get_download_url("missing")
        with self.assertRaises(MediaResolutionError):
            self.resolver.download("boxcnUnknown")


@pytest.mark.parametrize("content_type, extension", [
    (None, ".jpg"),
    ("image/jpeg", ".jpg"),
    ("image/png", ".png"),
    ("image/png; charset=binary", ".png"),
    ("application/x-unknown-thing", ".jpg"),
])
def test_media_extension(content_type, extension):
    assert media_extension(content_type) == extension


def test_save_media_keeps_only_file_name(tmp_path):
    path = save_media(MediaFile(content=b"data", filename="../../evil.png"), str(tmp_path / "static"))

    assert path == tmp_path / "static" / "evil.png"
    assert path.read_bytes() == b"data"


def test_media_reference():
    assert media_reference("a.png", "") == "a.png"
    assert media_reference("a.png", "static/") == "static/a.png"
    assert media_reference("a.png", "/assets") == "/assets/a.png"
