"""File schemas: remote file service wire format and the local file entry."""

from pydantic import BaseModel, ConfigDict, Field

# Business codes returned in the ``err`` field by the reference backend
ERR_OK = 0
ERR_EMPTY_UPLOAD = 400
ERR_REFUSED = 403
ERR_METADATA_UNAVAILABLE = 500

# Latest upload date that still formats in any local timezone (9999-12-30 UTC)
MAX_UPLOAD_DATE = 253402128000

ERROR_DESCRIPTIONS: dict[int, str] = {
    ERR_EMPTY_UPLOAD: "the file is empty",
    ERR_REFUSED: "the server refused the request",
    ERR_METADATA_UNAVAILABLE: "the server could not read the stored file",
}


def describe_error(code: int) -> str:
    """Human-readable description of a business error code."""
    return ERROR_DESCRIPTIONS.get(code, f"server error {code}")


class RemoteFileInfo(BaseModel):
    """One item of the remote file list."""
    model_config = ConfigDict(populate_by_name=True)

    file_name: str = Field(alias="fileName")
    file_size: int = Field(alias="fileSize", ge=0)
    upload_date: int = Field(alias="uploadDate", ge=0, le=MAX_UPLOAD_DATE)


class UploadResponse(BaseModel):
    """Upload result. On success the server echoes the stored file."""
    model_config = ConfigDict(populate_by_name=True)

    err: int
    file_name: str | None = Field(default=None, alias="fileName")
    file_size: int | None = Field(default=None, alias="fileSize", ge=0)
    upload_date: int | None = Field(default=None, alias="uploadDate", ge=0, le=MAX_UPLOAD_DATE)

    @property
    def ok(self) -> bool:
        return self.err == ERR_OK


class DeleteRequest(BaseModel):
    file: str


class DeleteResponse(BaseModel):
    err: int

    @property
    def ok(self) -> bool:
        return self.err == ERR_OK


class FileEntry(BaseModel):
    """A file as known to the widget."""
    name: str
    size_bytes: int = Field(ge=0)
    uploaded_at_unix: int = Field(ge=0, le=MAX_UPLOAD_DATE)

    @classmethod
    def from_remote(cls, info: RemoteFileInfo) -> "FileEntry":
        return cls(
            name=info.file_name,
            size_bytes=info.file_size,
            uploaded_at_unix=info.upload_date,
        )
