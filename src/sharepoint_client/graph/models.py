"""Data models for Microsoft Graph sites, drives and drive items."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# Graph API JSON field names
FIELD_ID = "id"
FIELD_NAME = "name"
FIELD_DISPLAY_NAME = "displayName"
FIELD_DESCRIPTION = "description"
FIELD_EMAIL = "email"
FIELD_WEB_URL = "webUrl"
FIELD_CREATED = "createdDateTime"
FIELD_LAST_MODIFIED = "lastModifiedDateTime"
FIELD_CREATED_BY = "createdBy"
FIELD_LAST_MODIFIED_BY = "lastModifiedBy"
FIELD_OWNER = "owner"
FIELD_DRIVE_TYPE = "driveType"
FIELD_DRIVE_ID = "driveId"
FIELD_SITE_ID = "siteId"
FIELD_QUOTA = "quota"
FIELD_SIZE = "size"
FIELD_ETAG = "eTag"
FIELD_CTAG = "cTag"
FIELD_FILE = "file"
FIELD_FOLDER = "folder"
FIELD_MIME_TYPE = "mimeType"
FIELD_HASHES = "hashes"
FIELD_CHILD_COUNT = "childCount"
FIELD_PARENT_REFERENCE = "parentReference"
FIELD_PATH = "path"
FIELD_FILE_SYSTEM_INFO = "fileSystemInfo"
FIELD_SHARED = "shared"
FIELD_SCOPE = "scope"

# Token endpoint field names
FIELD_TOKEN_TYPE = "token_type"
FIELD_EXPIRES_IN = "expires_in"
FIELD_EXT_EXPIRES_IN = "ext_expires_in"
FIELD_ACCESS_TOKEN = "access_token"

# OData response keys
ODATA_VALUE = "value"
ODATA_DOWNLOAD_URL = "@microsoft.graph.downloadUrl"

SITE_ID_SEPARATOR = ","


@dataclass(frozen=True)
class Token:
    """Bearer credential returned by the client-credentials token endpoint.

    The client does not track expiry. Callers re-authenticate when a request
    comes back empty because the token was rejected.
    """

    access_token: str
    expires_in: int
    ext_expires_in: int
    token_type: str = "Bearer"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Token:
        return cls(
            access_token=str(data[FIELD_ACCESS_TOKEN]),
            expires_in=int(data.get(FIELD_EXPIRES_IN, 0)),
            ext_expires_in=int(data.get(FIELD_EXT_EXPIRES_IN, 0)),
            token_type=str(data.get(FIELD_TOKEN_TYPE, "Bearer")),
        )

    @property
    def authorization(self) -> str:
        """Value for the ``Authorization`` request header."""
        return f"Bearer {self.access_token}"


@dataclass(frozen=True)
class Principal:
    """A user, group or application referenced by an identity set."""

    display_name: str
    id: str | None = None
    email: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Principal | None:
        if not data:
            return None
        return cls(
            display_name=data.get(FIELD_DISPLAY_NAME, ""),
            id=data.get(FIELD_ID),
            email=data.get(FIELD_EMAIL),
        )


@dataclass(frozen=True)
class Identity:
    """Graph identity set, as found in createdBy / lastModifiedBy / owner."""

    user: Principal | None = None
    group: Principal | None = None
    application: Principal | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Identity | None:
        if not data:
            return None
        return cls(
            user=Principal.from_dict(data.get("user")),
            group=Principal.from_dict(data.get("group")),
            application=Principal.from_dict(data.get("application")),
        )


@dataclass
class Site:
    """A SharePoint site.

    ``id`` is the composite ``"<hostname>,<site-collection-id>,<web-id>"``
    string Graph uses to address sites.
    """

    id: str
    name: str = ""
    display_name: str = ""
    description: str = ""
    web_url: str = ""
    created_date_time: str | None = None
    last_modified_date_time: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Site:
        return cls(
            id=data[FIELD_ID],
            name=data.get(FIELD_NAME, ""),
            display_name=data.get(FIELD_DISPLAY_NAME, ""),
            description=data.get(FIELD_DESCRIPTION, ""),
            web_url=data.get(FIELD_WEB_URL, ""),
            created_date_time=data.get(FIELD_CREATED),
            last_modified_date_time=data.get(FIELD_LAST_MODIFIED),
            raw=data,
        )


@dataclass
class Drive:
    """A document library within a site."""

    id: str
    name: str
    drive_type: str = ""
    description: str = ""
    web_url: str = ""
    created_date_time: str | None = None
    last_modified_date_time: str | None = None
    created_by: Identity | None = None
    last_modified_by: Identity | None = None
    owner: Identity | None = None
    quota: dict[str, Any] = field(default_factory=dict)
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Drive:
        return cls(
            id=data[FIELD_ID],
            name=data.get(FIELD_NAME, ""),
            drive_type=data.get(FIELD_DRIVE_TYPE, ""),
            description=data.get(FIELD_DESCRIPTION, ""),
            web_url=data.get(FIELD_WEB_URL, ""),
            created_date_time=data.get(FIELD_CREATED),
            last_modified_date_time=data.get(FIELD_LAST_MODIFIED),
            created_by=Identity.from_dict(data.get(FIELD_CREATED_BY)),
            last_modified_by=Identity.from_dict(data.get(FIELD_LAST_MODIFIED_BY)),
            owner=Identity.from_dict(data.get(FIELD_OWNER)),
            quota=data.get(FIELD_QUOTA) or {},
            raw=data,
        )


@dataclass(frozen=True)
class FileFacet:
    mime_type: str = ""
    hashes: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class FolderFacet:
    child_count: int = 0


@dataclass(frozen=True)
class ParentReference:
    """Location of an item's parent within its drive."""

    drive_id: str | None = None
    drive_type: str | None = None
    id: str | None = None
    name: str | None = None
    path: str | None = None
    site_id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ParentReference | None:
        if not data:
            return None
        return cls(
            drive_id=data.get(FIELD_DRIVE_ID),
            drive_type=data.get(FIELD_DRIVE_TYPE),
            id=data.get(FIELD_ID),
            name=data.get(FIELD_NAME),
            path=data.get(FIELD_PATH),
            site_id=data.get(FIELD_SITE_ID),
        )


@dataclass
class Item:
    """A file or folder within a drive.

    Graph sets exactly one of ``file`` / ``folder``; this is not checked here.
    """

    id: str
    name: str
    size: int = 0
    e_tag: str | None = None
    c_tag: str | None = None
    web_url: str = ""
    created_date_time: str | None = None
    last_modified_date_time: str | None = None
    created_by: Identity | None = None
    last_modified_by: Identity | None = None
    file: FileFacet | None = None
    folder: FolderFacet | None = None
    parent_reference: ParentReference | None = None
    file_system_created: str | None = None
    file_system_last_modified: str | None = None
    shared_scope: str | None = None
    download_url: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def is_file(self) -> bool:
        return self.file is not None

    @property
    def is_folder(self) -> bool:
        return self.folder is not None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Item:
        file_data = data.get(FIELD_FILE)
        folder_data = data.get(FIELD_FOLDER)
        fs_info = data.get(FIELD_FILE_SYSTEM_INFO) or {}
        shared = data.get(FIELD_SHARED) or {}
        return cls(
            id=data[FIELD_ID],
            name=data.get(FIELD_NAME, ""),
            size=int(data.get(FIELD_SIZE) or 0),
            e_tag=data.get(FIELD_ETAG),
            c_tag=data.get(FIELD_CTAG),
            web_url=data.get(FIELD_WEB_URL, ""),
            created_date_time=data.get(FIELD_CREATED),
            last_modified_date_time=data.get(FIELD_LAST_MODIFIED),
            created_by=Identity.from_dict(data.get(FIELD_CREATED_BY)),
            last_modified_by=Identity.from_dict(data.get(FIELD_LAST_MODIFIED_BY)),
            file=(
                FileFacet(
                    mime_type=file_data.get(FIELD_MIME_TYPE, ""),
                    hashes=file_data.get(FIELD_HASHES) or {},
                )
                if file_data is not None
                else None
            ),
            folder=(
                FolderFacet(child_count=int(folder_data.get(FIELD_CHILD_COUNT) or 0))
                if folder_data is not None
                else None
            ),
            parent_reference=ParentReference.from_dict(data.get(FIELD_PARENT_REFERENCE)),
            file_system_created=fs_info.get(FIELD_CREATED),
            file_system_last_modified=fs_info.get(FIELD_LAST_MODIFIED),
            shared_scope=shared.get(FIELD_SCOPE),
            download_url=data.get(ODATA_DOWNLOAD_URL),
            raw=data,
        )
