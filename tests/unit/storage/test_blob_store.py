"""Tests for the local and Supabase blob stores."""
import base64
import json
import unittest
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest.mock import MagicMock, patch

import requests

from core.config_loader import StorageConfig
from core.errors import PersistenceError
from storage.blob_store import (
    LocalBlobStore,
    SupabaseBlobStore,
    build_blob_store,
    resume_blob_path,
)


class TestResumeBlobPath(unittest.TestCase):

    def test_path_layout(self):
        self.assertEqual(resume_blob_path("u1", "r1", "cv.pdf"), "resumes/u1/r1/cv.pdf")

    def test_directories_in_file_name_are_dropped(self):
        self.assertEqual(resume_blob_path("u1", "r1", "../../etc/passwd"), "resumes/u1/r1/passwd")
        self.assertEqual(resume_blob_path("u1", "r1", "C:\\Users\\jane\\cv.docx"), "resumes/u1/r1/cv.docx")


class TestLocalBlobStore(unittest.TestCase):

    def setUp(self):
        self.tmp = TemporaryDirectory()
        self.root = Path(self.tmp.name)

    def tearDown(self):
        self.tmp.cleanup()

    def test_put_writes_file_and_returns_uri(self):
        store = LocalBlobStore(self.tmp.name)
        url = store.put("resumes/u1/r1/cv.txt", b"hello", "text/plain")

        target = self.root.resolve() / "resumes/u1/r1/cv.txt"
        self.assertEqual(target.read_bytes(), b"hello")
        self.assertEqual(url, target.as_uri())

    def test_put_with_base_url(self):
        store = LocalBlobStore(self.tmp.name, base_url="https://files.example.com/")
        url = store.put("resumes/u1/r1/cv.txt", b"hello", "text/plain")
        self.assertEqual(url, "https://files.example.com/resumes/u1/r1/cv.txt")

    def test_put_records_metadata(self):
        store = LocalBlobStore(self.tmp.name)
        store.put("resumes/u1/r1/cv.txt", b"hello", "text/plain", metadata={"userId": "u1"})

        sidecar = self.root.resolve() / "resumes/u1/r1/cv.txt.metadata.json"
        self.assertTrue(sidecar.exists())
        self.assertEqual(store.read_metadata("resumes/u1/r1/cv.txt"), {
            "contentType": "text/plain",
            "metadata": {"userId": "u1"},
        })

    def test_read_metadata_for_missing_object(self):
        store = LocalBlobStore(self.tmp.name)
        self.assertIsNone(store.read_metadata("resumes/u1/r1/missing.txt"))

    def test_delete(self):
        store = LocalBlobStore(self.tmp.name)
        store.put("resumes/u1/r1/cv.txt", b"hello", "text/plain")
        store.delete("resumes/u1/r1/cv.txt")
        self.assertFalse((self.root / "resumes/u1/r1/cv.txt").exists())
        self.assertFalse((self.root / "resumes/u1/r1/cv.txt.metadata.json").exists())

        # Deleting again is fine
        store.delete("resumes/u1/r1/cv.txt")

    def test_path_escape_is_rejected(self):
        store = LocalBlobStore(self.tmp.name)
        with self.assertRaises(PersistenceError):
            store.put("../outside.txt", b"x", "text/plain")


class TestSupabaseBlobStore(unittest.TestCase):

    def setUp(self):
        self.store = SupabaseBlobStore("https://demo.supabase.co/", "service-key", "resumes", timeout=5)
        self.store.session = MagicMock()

    def test_headers(self):
        store = SupabaseBlobStore("https://demo.supabase.co", "service-key", "resumes")
        self.assertEqual(store.session.headers["Authorization"], "Bearer service-key")
        self.assertEqual(store.session.headers["apikey"], "service-key")

    def test_put(self):
        self.store.session.post.return_value = MagicMock(status_code=200, text="{}")

        url = self.store.put("resumes/u1/r1/cv.pdf", b"%PDF", "application/pdf")

        self.assertEqual(url, "https://demo.supabase.co/storage/v1/object/public/resumes/resumes/u1/r1/cv.pdf")
        args, kwargs = self.store.session.post.call_args
        self.assertEqual(args[0], "https://demo.supabase.co/storage/v1/object/resumes/resumes/u1/r1/cv.pdf")
        self.assertEqual(kwargs["data"], b"%PDF")
        self.assertEqual(kwargs["headers"]["Content-Type"], "application/pdf")
        self.assertEqual(kwargs["timeout"], 5)
        self.assertNotIn("x-metadata", kwargs["headers"])

    def test_put_sends_metadata(self):
        self.store.session.post.return_value = MagicMock(status_code=200, text="{}")

        self.store.put(
            "resumes/u1/r1/cv.pdf", b"%PDF", "application/pdf",
            metadata={"userId": "u1", "originalName": "cv.pdf"},
        )

        _, kwargs = self.store.session.post.call_args
        encoded = kwargs["headers"]["x-metadata"]
        self.assertEqual(
            json.loads(base64.b64decode(encoded)),
            {"userId": "u1", "originalName": "cv.pdf"},
        )

    def test_put_error_status(self):
        self.store.session.post.return_value = MagicMock(status_code=400, text="Bucket not found")
        with self.assertRaises(PersistenceError) as ctx:
            self.store.put("resumes/u1/r1/cv.pdf", b"%PDF", "application/pdf")
        self.assertIn("Bucket not found", str(ctx.exception))

    def test_put_network_error(self):
        self.store.session.post.side_effect = requests.ConnectionError("unreachable")
        with self.assertRaises(PersistenceError):
            self.store.put("resumes/u1/r1/cv.pdf", b"%PDF", "application/pdf")

    def test_delete_missing_object_is_ok(self):
        self.store.session.delete.return_value = MagicMock(status_code=404, text="")
        self.store.delete("resumes/u1/r1/cv.pdf")

    def test_delete_error_status(self):
        self.store.session.delete.return_value = MagicMock(status_code=500, text="oops")
        with self.assertRaises(PersistenceError):
            self.store.delete("resumes/u1/r1/cv.pdf")


class TestBuildBlobStore(unittest.TestCase):

    def test_local_default(self):
        with TemporaryDirectory() as tmp:
            store = build_blob_store(StorageConfig(local_root=tmp))
            self.assertIsInstance(store, LocalBlobStore)

    def test_supabase(self):
        config = StorageConfig(
            backend="supabase",
            supabase_url="https://demo.supabase.co",
            supabase_service_key="key",
        )
        with patch("storage.blob_store.requests.Session"):
            self.assertIsInstance(build_blob_store(config), SupabaseBlobStore)

    def test_supabase_requires_credentials(self):
        with self.assertRaises(ValueError):
            build_blob_store(StorageConfig(backend="supabase"))


if __name__ == '__main__':
    unittest.main()
