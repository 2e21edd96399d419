import threading
import unittest
from unittest.mock import Mock

from fakes import FakeFileTree, FakeRemoteStore, MemoryStore

from vaultsync.errors import AuthError, InvalidStateError
from vaultsync.manager import VaultSyncManager
from vaultsync.store import SyncSettings
from vaultsync.sync import SyncPhase


class TestVaultSyncManager(unittest.TestCase):
    def _make(self, files=None, store=None, token_provider=None):
        remote = FakeRemoteStore()
        tree = FakeFileTree(files or {"notes/a.md": ("hello", 1000)})
        store = store or MemoryStore()
        mgr = VaultSyncManager.from_components(
            remote, tree, store, token_provider=token_provider
        )
        return mgr, remote, store

    def test_sync_runs_full_pass_and_persists(self) -> None:
        mgr, remote, store = self._make()

        result = mgr.sync()

        self.assertEqual(result.status, "success")
        self.assertEqual(result.created, 1)
        self.assertIn("notes/a.md", store.file_ids)
        self.assertIsNotNone(store.settings.last_sync_timestamp)
        self.assertFalse(mgr.running)
        self.assertEqual(mgr.phase, SyncPhase.IDLE)

    def test_second_sync_is_idempotent(self) -> None:
        mgr, remote, _ = self._make()
        mgr.sync()
        remote.calls.clear()

        result = mgr.sync()

        self.assertEqual(result.uploaded, 0)
        self.assertEqual(remote.count("create_folder"), 0)

    def test_token_is_refreshed_at_pass_start(self) -> None:
        provider = Mock()
        mgr, _, _ = self._make(token_provider=provider)

        mgr.sync()

        provider.get_credentials.assert_called_once_with(ensure_valid=True)

    def test_auth_failure_returns_failed_result_before_any_call(self) -> None:
        provider = Mock()
        provider.get_credentials.side_effect = AuthError("refresh token revoked")
        mgr, remote, store = self._make(token_provider=provider)

        with self.assertLogs("vaultsync.manager", level="ERROR"):
            result = mgr.sync()

        self.assertEqual(result.status, "failed")
        self.assertEqual(result.message, "Error during sync")
        self.assertIn("refresh token revoked", result.fatal_error)
        self.assertEqual(remote.calls, [])
        self.assertIsNone(store.settings.last_sync_timestamp)
        self.assertFalse(mgr.running)

    def test_missing_credentials_is_auth_failure(self) -> None:
        store = MemoryStore(settings=SyncSettings(client_id="", client_secret="", refresh_token=""))
        mgr = VaultSyncManager("/nonexistent-vault")
        mgr._store = store  # type: ignore[assignment]

        with self.assertLogs("vaultsync.manager", level="ERROR"):
            result = mgr.sync()

        self.assertEqual(result.status, "failed")
        self.assertIn("not logged in", result.fatal_error)

    def test_concurrent_sync_is_rejected(self) -> None:
        started = threading.Event()
        release = threading.Event()
        mgr, remote, _ = self._make()
        original_find = remote.find_folders

        def slow_find(*args, **kwargs):
            started.set()
            release.wait(timeout=5)
            return original_find(*args, **kwargs)

        remote.find_folders = slow_find  # type: ignore[assignment]
        results = []
        worker = threading.Thread(target=lambda: results.append(mgr.sync()))
        worker.start()
        try:
            self.assertTrue(started.wait(timeout=5))
            self.assertTrue(mgr.running)
            with self.assertRaises(InvalidStateError):
                mgr.sync()
        finally:
            release.set()
            worker.join(timeout=5)

        self.assertEqual(results[0].status, "success")
        self.assertFalse(mgr.running)

    def test_cancel_during_pass(self) -> None:
        files = {"a.md": ("a", 1), "b.md": ("b", 1), "c.md": ("c", 1)}
        mgr, remote, store = self._make(files=files)
        original_create = remote.create_file

        def create_then_cancel(*args, **kwargs):
            file_id = original_create(*args, **kwargs)
            mgr.cancel()
            return file_id

        remote.create_file = create_then_cancel  # type: ignore[assignment]

        result = mgr.sync()

        self.assertEqual(result.status, "cancelled")
        self.assertEqual(result.created, 1)
        self.assertIsNone(store.settings.last_sync_timestamp)

        # Cancellation does not leak into the next pass.
        remote.create_file = original_create  # type: ignore[assignment]
        result = mgr.sync()
        self.assertEqual(result.status, "success")
        self.assertEqual(result.created, 2)
        self.assertEqual(result.updated, 1)

    def test_cancel_when_idle_is_noop(self) -> None:
        mgr, _, _ = self._make()
        mgr.cancel()
        self.assertEqual(mgr.sync().status, "success")


if __name__ == "__main__":
    unittest.main()
