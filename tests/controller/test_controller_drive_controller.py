import json
import unittest
from unittest.mock import Mock, patch

from googleapiclient.errors import HttpError

from vaultsync.controller.drive_controller import (
    GoogleDriveController,
    _file_dict_to_remote_item,
    build_query,
    escape_query_value,
)
from vaultsync.errors import ApiError, AuthError, NotFoundError, RateLimitError
from vaultsync.util.mime import FOLDER_MIME


def _http_error(status: int, reason: str, body=None) -> HttpError:
    resp = Mock()
    resp.status = status
    resp.reason = reason
    content = json.dumps(body).encode("utf-8") if body is not None else b"{}"
    return HttpError(resp=resp, content=content)


class TestDriveControllerHelpers(unittest.TestCase):
    def test_file_dict_to_remote_item(self) -> None:
        item = _file_dict_to_remote_item(
            {
                "id": "F1",
                "name": "notes",
                "mimeType": FOLDER_MIME,
            }
        )
        self.assertEqual(item.item_id, "F1")
        self.assertEqual(item.name, "notes")
        self.assertEqual(item.mime_type, FOLDER_MIME)

    def test_file_dict_to_remote_item_tolerates_missing_fields(self) -> None:
        item = _file_dict_to_remote_item({"id": None})
        self.assertEqual((item.item_id, item.name, item.mime_type), ("", "", ""))

    def test_escape_query_value(self) -> None:
        self.assertEqual(escape_query_value("Bob's \\notes"), "Bob\\'s \\\\notes")

    def test_build_query(self) -> None:
        q = build_query(parent_id="P1", name="it's", folders_only=True)
        self.assertEqual(
            q,
            f"name='it\\'s' and mimeType='{FOLDER_MIME}' and 'P1' in parents and trashed=false",
        )
        self.assertEqual(build_query(name="Obsidian Vault", folders_only=True),
                         f"name='Obsidian Vault' and mimeType='{FOLDER_MIME}' and trashed=false")


class TestDriveControllerMocked(unittest.TestCase):
    def setUp(self) -> None:
        self.service = Mock()
        self.files_resource = Mock()
        self.service.files.return_value = self.files_resource
        self.controller = GoogleDriveController.from_service(self.service)

    def test_list_children_paginates(self) -> None:
        page1 = Mock()
        page1.execute.return_value = {
            "files": [{"id": "A", "name": "notes", "mimeType": FOLDER_MIME}],
            "nextPageToken": "T2",
        }
        page2 = Mock()
        page2.execute.return_value = {"files": [{"id": "B", "name": "notes", "mimeType": FOLDER_MIME}]}
        self.files_resource.list.side_effect = [page1, page2]

        items = self.controller.list_children("P1", name="notes", folders_only=True)

        self.assertEqual([i.item_id for i in items], ["A", "B"])
        first_kwargs = self.files_resource.list.call_args_list[0].kwargs
        second_kwargs = self.files_resource.list.call_args_list[1].kwargs
        self.assertIn("'P1' in parents", first_kwargs["q"])
        self.assertIn("name='notes'", first_kwargs["q"])
        self.assertIsNone(first_kwargs["pageToken"])
        self.assertEqual(second_kwargs["pageToken"], "T2")

    def test_create_folder_without_parent(self) -> None:
        req = Mock()
        req.execute.return_value = {"id": "ROOT"}
        self.files_resource.create.return_value = req

        self.assertEqual(self.controller.create_folder("Obsidian Vault", None), "ROOT")
        body = self.files_resource.create.call_args.kwargs["body"]
        self.assertEqual(body, {"name": "Obsidian Vault", "mimeType": FOLDER_MIME})

    def test_create_file_uploads_text_as_utf8(self) -> None:
        req = Mock()
        req.execute.return_value = {"id": "F1"}
        self.files_resource.create.return_value = req

        file_id = self.controller.create_file("a.md", "P1", "text/markdown", "héllo")

        self.assertEqual(file_id, "F1")
        kwargs = self.files_resource.create.call_args.kwargs
        self.assertEqual(kwargs["body"], {"name": "a.md", "parents": ["P1"], "mimeType": "text/markdown"})
        media = kwargs["media_body"]
        self.assertEqual(media.mimetype(), "text/markdown")
        self.assertEqual(media.getbytes(0, media.size()), "héllo".encode("utf-8"))

    def test_update_file_moves_when_parent_changed(self) -> None:
        get_req = Mock()
        get_req.execute.return_value = {"parents": ["OLD"]}
        self.files_resource.get.return_value = get_req
        upd_req = Mock()
        upd_req.execute.return_value = {"id": "F1"}
        self.files_resource.update.return_value = upd_req

        self.controller.update_file("F1", "a.md", "text/markdown", b"x", parent_id="NEW")

        kwargs = self.files_resource.update.call_args.kwargs
        self.assertEqual(kwargs["fileId"], "F1")
        self.assertEqual(kwargs["addParents"], "NEW")
        self.assertEqual(kwargs["removeParents"], "OLD")
        self.assertEqual(kwargs["body"], {"name": "a.md", "mimeType": "text/markdown"})

    def test_update_file_same_parent_does_not_move(self) -> None:
        get_req = Mock()
        get_req.execute.return_value = {"parents": ["P1"]}
        self.files_resource.get.return_value = get_req
        upd_req = Mock()
        upd_req.execute.return_value = {"id": "F1"}
        self.files_resource.update.return_value = upd_req

        self.controller.update_file("F1", "a.md", "text/markdown", "x", parent_id="P1")

        kwargs = self.files_resource.update.call_args.kwargs
        self.assertNotIn("addParents", kwargs)
        self.assertNotIn("removeParents", kwargs)

    def test_update_maps_http_404_to_not_found(self) -> None:
        req = Mock()
        req.execute.side_effect = _http_error(404, "Not Found")
        self.files_resource.update.return_value = req

        with self.assertRaises(NotFoundError):
            self.controller.update_file("X", "a.md", "text/markdown", "x")

    def test_list_retries_on_429(self) -> None:
        err = _http_error(
            429,
            "rateLimitExceeded",
            {"error": {"message": "rate limited", "errors": [{"reason": "rateLimitExceeded"}]}},
        )
        req = Mock()
        req.execute.side_effect = [err, err, {"files": [{"id": "D1", "name": "notes"}]}]
        self.files_resource.list.return_value = req

        with patch("time.sleep", return_value=None):
            items = self.controller.list_children("P1", name="notes")

        self.assertEqual([i.item_id for i in items], ["D1"])
        self.assertEqual(req.execute.call_count, 3)

    def test_rate_limit_error_after_retries(self) -> None:
        req = Mock()
        req.execute.side_effect = _http_error(429, "rateLimitExceeded")
        self.files_resource.list.return_value = req

        with patch("time.sleep", return_value=None):
            with self.assertRaises(RateLimitError) as ctx:
                self.controller.find_folders("Obsidian Vault")

        self.assertTrue(ctx.exception.transient)
        self.assertEqual(req.execute.call_count, 4)

    def test_update_retries_on_503(self) -> None:
        req = Mock()
        req.execute.side_effect = [_http_error(503, "Service Unavailable"), {"id": "F1"}]
        self.files_resource.update.return_value = req

        with patch("time.sleep", return_value=None):
            file_id = self.controller.update_file("F1", "a.md", "text/markdown", "x")

        self.assertEqual(file_id, "F1")
        self.assertEqual(req.execute.call_count, 2)

    def test_create_folder_is_not_replayed_after_503(self) -> None:
        req = Mock()
        req.execute.side_effect = [_http_error(503, "Service Unavailable"), {"id": "D2"}]
        self.files_resource.create.return_value = req

        with patch("time.sleep", return_value=None) as sleep:
            with self.assertRaises(ApiError) as ctx:
                self.controller.create_folder("notes", "P1")

        self.assertTrue(ctx.exception.transient)
        self.assertEqual(req.execute.call_count, 1)
        sleep.assert_not_called()

    def test_create_file_is_not_replayed_after_429(self) -> None:
        req = Mock()
        req.execute.side_effect = [_http_error(429, "rateLimitExceeded"), {"id": "F2"}]
        self.files_resource.create.return_value = req

        with patch("time.sleep", return_value=None):
            with self.assertRaises(RateLimitError):
                self.controller.create_file("a.md", "P1", "text/markdown", "x")

        self.assertEqual(req.execute.call_count, 1)


    def test_refresh_error_maps_to_auth_error_without_retry(self) -> None:
        from google.auth.exceptions import RefreshError

        req = Mock()
        req.execute.side_effect = RefreshError("invalid_grant")
        self.files_resource.create.return_value = req

        with self.assertRaises(AuthError):
            self.controller.create_folder("notes", "P1")
        self.assertEqual(req.execute.call_count, 1)

    def test_missing_id_in_response_is_api_error(self) -> None:
        req = Mock()
        req.execute.return_value = {}
        self.files_resource.create.return_value = req

        with self.assertRaises(ApiError):
            self.controller.create_folder("notes", "P1")


if __name__ == "__main__":
    unittest.main()
