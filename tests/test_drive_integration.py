import os
import tempfile
import unittest
from pathlib import Path

from vaultsync import JsonStore, SyncOptions, SyncSettings, VaultSyncManager


def _env(name: str) -> str:
    value = os.environ.get(name, "").strip()
    if not value:
        raise unittest.SkipTest(f"Missing env var: {name}")
    return value


class TestGoogleDriveIntegration(unittest.TestCase):
    """
    Integration test with real Google Drive.

    Required env vars:
        - VAULTSYNC_CLIENT_ID: OAuth client id
        - VAULTSYNC_CLIENT_SECRET: OAuth client secret
        - VAULTSYNC_REFRESH_TOKEN: refresh token with drive.file scope
        - VAULTSYNC_TEST_ROOT_ID: Drive folder ID used as parent of the test root (safe sandbox)
    """

    @classmethod
    def setUpClass(cls) -> None:
        cls.settings = SyncSettings(
            client_id=_env("VAULTSYNC_CLIENT_ID"),
            client_secret=_env("VAULTSYNC_CLIENT_SECRET"),
            refresh_token=_env("VAULTSYNC_REFRESH_TOKEN"),
        )
        cls.root_parent_id = _env("VAULTSYNC_TEST_ROOT_ID")

    def test_two_passes_smoke(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            tmp_path = Path(tmp)
            vault = tmp_path / "vault"
            (vault / "notes").mkdir(parents=True)
            (vault / "notes" / "a.md").write_text("hello from vaultsync\n", encoding="utf-8")
            (vault / "img.png").write_bytes(b"\x89PNG\r\n\x1a\n")

            state_dir = tmp_path / "state"
            JsonStore(state_dir).save_settings(self.settings)

            mgr = VaultSyncManager(
                vault,
                state_dir=state_dir,
                options=SyncOptions(
                    root_folder_name="vaultsync_it_tmp",
                    root_parent_id=self.root_parent_id,
                ),
            )

            first = mgr.sync()
            self.assertEqual(first.status, "success", first.fatal_error)
            self.assertEqual(first.created, 2)

            second = mgr.sync()
            self.assertEqual(second.status, "success", second.fatal_error)
            self.assertEqual(second.uploaded, 0)
            self.assertEqual(second.folders_created, 0)


if __name__ == "__main__":
    unittest.main()
