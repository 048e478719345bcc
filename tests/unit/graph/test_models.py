"""Unit tests for graph/models.py: building records from Graph JSON."""

import pytest

from sharepoint_client.graph.models import Drive, Identity, Item, Site, Token


class TestToken:
    def test_from_token_endpoint_body(self) -> None:
        token = Token.from_dict(
            {
                "token_type": "Bearer",
                "expires_in": 3599,
                "ext_expires_in": 3599,
                "access_token": "eyJ0eXAi",
            }
        )
        assert token.access_token == "eyJ0eXAi"
        assert token.expires_in == 3599
        assert token.authorization == "Bearer eyJ0eXAi"

    def test_missing_access_token_raises(self) -> None:
        with pytest.raises(KeyError):
            Token.from_dict({"token_type": "Bearer"})


class TestIdentity:
    def test_user_identity(self) -> None:
        identity = Identity.from_dict(
            {"user": {"displayName": "Ada", "email": "ada@contoso.com", "id": "u1"}}
        )
        assert identity is not None
        assert identity.user is not None
        assert identity.user.display_name == "Ada"
        assert identity.user.email == "ada@contoso.com"
        assert identity.group is None

    def test_application_identity(self) -> None:
        identity = Identity.from_dict({"application": {"id": "app-1", "displayName": "Sync"}})
        assert identity is not None
        assert identity.application is not None
        assert identity.application.id == "app-1"

    def test_empty_is_none(self) -> None:
        assert Identity.from_dict(None) is None
        assert Identity.from_dict({}) is None


class TestSite:
    def test_from_dict_keeps_raw_payload(self) -> None:
        data = {
            "@odata.context": "https://graph.microsoft.com/v1.0/$metadata#sites/$entity",
            "id": "contoso.sharepoint.com,s1,w1",
            "name": "Finance",
            "displayName": "Finance",
            "webUrl": "https://contoso.sharepoint.com/sites/Finance",
            "root": {},
        }
        site = Site.from_dict(data)
        assert site.id == "contoso.sharepoint.com,s1,w1"
        assert site.web_url == "https://contoso.sharepoint.com/sites/Finance"
        assert site.raw["root"] == {}


class TestDrive:
    def test_from_dict(self) -> None:
        drive = Drive.from_dict(
            {
                "id": "b!abc",
                "name": "Documents",
                "driveType": "documentLibrary",
                "owner": {"group": {"displayName": "Finance Owners"}},
                "quota": {"used": 10},
            }
        )
        assert drive.name == "Documents"
        assert drive.drive_type == "documentLibrary"
        assert drive.owner is not None
        assert drive.owner.group is not None
        assert drive.owner.group.display_name == "Finance Owners"
        assert drive.quota == {"used": 10}
        assert drive.created_by is None


class TestItem:
    def test_file_item(self) -> None:
        item = Item.from_dict(
            {
                "@microsoft.graph.downloadUrl": "https://download.example/abc",
                "id": "01ABC",
                "name": "budget.xlsx",
                "size": 2048,
                "eTag": '"{1},1"',
                "file": {"mimeType": "application/vnd.ms-excel", "hashes": {"quickXorHash": "q="}},
                "fileSystemInfo": {
                    "createdDateTime": "2024-01-01T00:00:00Z",
                    "lastModifiedDateTime": "2024-01-02T00:00:00Z",
                },
                "parentReference": {"driveId": "b!abc", "path": "/drive/root:/Budgets"},
                "shared": {"scope": "users"},
            }
        )
        assert item.is_file
        assert not item.is_folder
        assert item.file is not None
        assert item.file.mime_type == "application/vnd.ms-excel"
        assert item.size == 2048
        assert item.download_url == "https://download.example/abc"
        assert item.parent_reference is not None
        assert item.parent_reference.path == "/drive/root:/Budgets"
        assert item.file_system_last_modified == "2024-01-02T00:00:00Z"
        assert item.shared_scope == "users"

    def test_folder_item(self) -> None:
        item = Item.from_dict({"id": "01DIR", "name": "Archive", "folder": {"childCount": 4}})
        assert item.is_folder
        assert item.folder is not None
        assert item.folder.child_count == 4
        assert item.download_url is None

    def test_empty_folder_facet_still_marks_folder(self) -> None:
        item = Item.from_dict({"id": "01DIR", "name": "Empty", "folder": {}})
        assert item.is_folder

    def test_repr_contains_name(self) -> None:
        item = Item.from_dict({"id": "1", "name": "hello.md"})
        assert "hello.md" in repr(item)
