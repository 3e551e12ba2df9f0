"""Tests for the file record store."""

import threading
import unittest
from unittest.mock import patch

from sqlalchemy.exc import OperationalError

from errors import PersistenceError
from api.files.repositories import files_repository
from helpers import store_file


class TestCreate(unittest.TestCase):

    def test_create_returns_usable_id(self):
        path = store_file("notes.txt", b"hello")
        file_id = files_repository.create(str(path), "notes.txt", size=5)

        self.assertTrue(files_repository.is_valid_id(file_id))
        record = files_repository.get_by_id(file_id)
        self.assertEqual(record.id, file_id)
        self.assertEqual(record.filename, "notes.txt")
        self.assertEqual(record.filepath, str(path))
        self.assertEqual(record.size, 5)
        self.assertEqual(record.download_count, 0)
        self.assertIsNone(record.password_hash)
        self.assertFalse(record.has_password)
        self.assertIsNotNone(record.created_at)

    def test_create_keeps_password_hash(self):
        file_id = files_repository.create("/tmp/x", "x.bin", password_hash="$2b$04$hash")
        record = files_repository.get_by_id(file_id)
        self.assertEqual(record.password_hash, "$2b$04$hash")
        self.assertTrue(record.has_password)

    def test_ids_are_unique(self):
        ids = {files_repository.create("/tmp/x", "x.bin") for _ in range(20)}
        self.assertEqual(len(ids), 20)

    def test_taken_id_is_never_reused(self):
        taken = files_repository.create("/tmp/a", "a.bin")
        fresh = files_repository.generate_id()

        with patch.object(files_repository, "generate_id", side_effect=[taken, fresh]):
            file_id = files_repository.create("/tmp/b", "b.bin")

        self.assertEqual(file_id, fresh)
        self.assertEqual(files_repository.get_by_id(taken).filename, "a.bin")

    def test_gives_up_when_no_free_id(self):
        taken = files_repository.create("/tmp/a", "a.bin")
        with patch.object(files_repository, "generate_id", return_value=taken):
            with self.assertRaises(PersistenceError):
                files_repository.create("/tmp/b", "b.bin")

    def test_requires_path_and_name(self):
        with self.assertRaises(ValueError):
            files_repository.create("", "a.bin")
        with self.assertRaises(ValueError):
            files_repository.create("/tmp/a", "")

    def test_storage_failure_is_persistence_error(self):
        error = OperationalError("INSERT", {}, Exception("disk I/O error"))
        with patch.object(files_repository, "_get_session", side_effect=error):
            with self.assertRaises(PersistenceError):
                files_repository.create("/tmp/a", "a.bin")


class TestGet(unittest.TestCase):

    def test_unknown_id_is_none(self):
        self.assertIsNone(files_repository.get_by_id(files_repository.generate_id()))

    def test_malformed_id_is_none(self):
        for bad in ("", "short", "../../etc/passwd", "x" * 40):
            with self.subTest(file_id=bad):
                self.assertIsNone(files_repository.get_by_id(bad))


class TestIncrementDownload(unittest.TestCase):

    def test_increments_by_one(self):
        file_id = files_repository.create("/tmp/a", "a.bin")

        self.assertTrue(files_repository.increment_download(file_id))
        self.assertTrue(files_repository.increment_download(file_id))

        self.assertEqual(files_repository.get_by_id(file_id).download_count, 2)

    def test_missing_record_reports_false(self):
        self.assertFalse(files_repository.increment_download(files_repository.generate_id()))

    def test_only_touches_its_own_record(self):
        first = files_repository.create("/tmp/a", "a.bin")
        second = files_repository.create("/tmp/b", "b.bin")

        files_repository.increment_download(first)

        self.assertEqual(files_repository.get_by_id(first).download_count, 1)
        self.assertEqual(files_repository.get_by_id(second).download_count, 0)

    def test_concurrent_increments_are_not_lost(self):
        file_id = files_repository.create("/tmp/a", "a.bin")
        workers = 25
        barrier = threading.Barrier(workers)
        results = []

        def worker():
            barrier.wait()
            results.append(files_repository.increment_download(file_id))

        threads = [threading.Thread(target=worker) for _ in range(workers)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(results, [True] * workers)
        self.assertEqual(files_repository.get_by_id(file_id).download_count, workers)

    def test_storage_failure_is_persistence_error(self):
        error = OperationalError("UPDATE", {}, Exception("database is locked"))
        with patch.object(files_repository, "_get_session", side_effect=error):
            with self.assertRaises(PersistenceError):
                files_repository.increment_download("a" * 16)


class TestTotalStorage(unittest.TestCase):

    def test_sums_sizes(self):
        before = files_repository.get_total_storage()
        files_repository.create("/tmp/a", "a.bin", size=100)
        files_repository.create("/tmp/b", "b.bin", size=50)
        self.assertEqual(files_repository.get_total_storage(), before + 150)


if __name__ == "__main__":
    unittest.main()
