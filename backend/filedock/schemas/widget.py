"""Widget view models, the rendered state of the file manager."""

from pydantic import BaseModel

from filedock.schemas.files import FileEntry


class FileRow(BaseModel):
    """One rendered list entry."""
    name: str  # untruncated, server-authoritative
    display_name: str
    size: str
    uploaded_at: str
    download_url: str
    delete_key: str


class FileListView(BaseModel):
    """Rendered file list: either rows or the placeholder, never both."""
    rows: list[FileRow] = []
    placeholder: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.rows


class WidgetView(BaseModel):
    """Whole widget state as presented to the user."""
    files: FileListView
    submit_enabled: bool
    upload_in_flight: bool = False
    selected_name: str | None = None
    message: str | None = None
    message_level: str | None = None  # "info" or "error"


class SyncResultOut(BaseModel):
    """JSON result of a widget operation."""
    outcome: str
    message: str | None = None
    error_code: int | None = None
    entry: FileEntry | None = None
    view: WidgetView
