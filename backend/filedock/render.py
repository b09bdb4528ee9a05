"""Rendering: registry -> list view model -> HTML page."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from filedock import __version__
from filedock.schemas.files import FileEntry
from filedock.schemas.widget import FileListView, FileRow, WidgetView
from filedock.utils.formatting import (
    DEFAULT_NAME_LENGTH,
    format_size,
    format_timestamp,
    truncate_name,
)

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


def render_row(
    entry: FileEntry,
    download_url: Callable[[str], str],
    max_length: int = DEFAULT_NAME_LENGTH,
) -> FileRow:
    return FileRow(
        name=entry.name,
        display_name=truncate_name(entry.name, max_length),
        size=format_size(entry.size_bytes),
        uploaded_at=format_timestamp(entry.uploaded_at_unix),
        download_url=download_url(entry.name),
        delete_key=entry.name,
    )


def render_file_list(
    entries: Iterable[FileEntry],
    download_url: Callable[[str], str],
    placeholder: str,
    max_length: int = DEFAULT_NAME_LENGTH,
) -> FileListView:
    """Project entries onto the list view; no entries gives the placeholder only."""
    rows = [render_row(e, download_url, max_length) for e in entries]
    if not rows:
        return FileListView(rows=[], placeholder=placeholder)
    return FileListView(rows=rows, placeholder=None)


def render_page(view: WidgetView, title: str = "FileDock") -> str:
    """Render the full widget page."""
    template = _env.get_template("index.html")
    return template.render(view=view, title=title, version=__version__)


def render_confirm_page(file_name: str, title: str = "FileDock") -> str:
    """Render the yes/no gate shown before a delete."""
    template = _env.get_template("confirm_delete.html")
    return template.render(file_name=file_name, title=title, version=__version__)
