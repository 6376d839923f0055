#!/usr/bin/env python3
"""
Tests for the file save helpers.
"""

import base64
import tempfile
import unittest
from pathlib import Path

import httpx

from aio_openai import FileSaveError
from aio_openai.utils import download_url, random_file_name, save_b64
from aio_openai.utils.download import create_paths


class TestPaths(unittest.TestCase):
    """Test cases for path helpers."""

    def test_random_file_name(self):
        name = random_file_name()

        self.assertTrue(name.endswith(".png"))
        self.assertEqual(len(name), 14)
        self.assertNotEqual(random_file_name(), random_file_name())

    def test_create_paths(self):
        directory, file_path = create_paths("https://cdn.test/a/b/image%201.png?x=1", "/tmp/out")

        self.assertEqual(directory, Path("/tmp/out/a/b"))
        self.assertEqual(file_path, Path("/tmp/out/a/b/image 1.png"))

    def test_create_paths_rejects_encoded_separators_and_dot_segments(self):
        """Encoded '/', '\\' and '..' must never move the file out of the base directory."""
        urls = [
            "https://cdn.test/x/%2Ftmp%2Fpwned.png",
            "https://cdn.test/a/%2e%2e/%2e%2e/evil.png",
            "https://cdn.test/a/../evil.png",
            "https://cdn.test/a/..%5C..%5Cevil.png",
        ]

        for url in urls:
            with self.subTest(url=url):
                with self.assertRaises(FileSaveError):
                    create_paths(url, "/tmp/out")


class TestSaveB64(unittest.TestCase):

    def test_writes_decoded_bytes(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = save_b64(base64.b64encode(b"png").decode(), tmp)

            self.assertEqual(path.parent, Path(tmp))
            self.assertEqual(path.read_bytes(), b"png")

    def test_invalid_data(self):
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(FileSaveError):
                save_b64("%%%", tmp)


class TestDownloadUrl(unittest.IsolatedAsyncioTestCase):
    """Test cases for download_url."""

    async def test_download(self):
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(200, content=b"data")))

        with tempfile.TemporaryDirectory() as tmp:
            path = await download_url("https://cdn.test/files/report.pdf", tmp, client)

            self.assertEqual(path, Path(tmp) / "files" / "report.pdf")
            self.assertEqual(path.read_bytes(), b"data")
        await client.aclose()

    async def test_download_refuses_path_outside_directory(self):
        """A url with encoded dot segments fails before anything is fetched or written."""
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, content=b"data")

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))

        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "images"
            with self.assertRaises(FileSaveError):
                await download_url("https://cdn.test/a/%2e%2e/%2e%2e/evil.png", target, client)

            self.assertFalse((Path(tmp) / "evil.png").exists())
            self.assertEqual(list(Path(tmp).rglob("*.png")), [])

        self.assertEqual(requests, [])
        await client.aclose()

    async def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("unreachable")

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))

        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(FileSaveError) as ctx:
                await download_url("https://cdn.test/a.png", tmp, client)

        self.assertIn("unreachable", str(ctx.exception))
        await client.aclose()


if __name__ == "__main__":
    unittest.main()
