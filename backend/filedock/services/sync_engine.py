"""Sync engine: keeps the local registry consistent with the remote file store.

Each operation is a single-shot coroutine returning a SyncResult. Nothing in
here raises for user, business or transport errors; the outcome says what
happened and the message is what the user sees.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum

from filedock.config import settings
from filedock.render import render_file_list
from filedock.schemas.files import FileEntry, describe_error
from filedock.schemas.widget import FileListView, WidgetView
from filedock.services.registry import FileCollection
from filedock.services.remote_files import RemoteFileService, TransportError

logger = logging.getLogger(__name__)

Confirm = Callable[[str], "bool | Awaitable[bool]"]


class SyncOutcome(str, Enum):
    OK = "ok"
    PRECONDITION_FAILED = "precondition_failed"
    BUSINESS_ERROR = "business_error"
    TRANSPORT_ERROR = "transport_error"
    DECLINED = "declined"


@dataclass
class SyncResult:
    outcome: SyncOutcome
    message: str | None = None
    error_code: int | None = None
    entry: FileEntry | None = None

    @property
    def ok(self) -> bool:
        return self.outcome == SyncOutcome.OK

    @property
    def is_error(self) -> bool:
        return self.outcome not in (SyncOutcome.OK, SyncOutcome.DECLINED)


@dataclass
class SelectedFile:
    """A file picked by the user, not yet uploaded."""
    name: str
    content: bytes
    content_type: str = "application/octet-stream"

    @property
    def size_bytes(self) -> int:
        return len(self.content)


class UploadControl:
    """File selection control plus its submit affordance."""

    def __init__(self):
        self._selection: SelectedFile | None = None
        self._in_flight = False

    @property
    def selection(self) -> SelectedFile | None:
        return self._selection

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @property
    def submit_enabled(self) -> bool:
        return self._selection is not None and not self._in_flight

    def select(self, selected: SelectedFile | None) -> None:
        self._selection = selected

    def clear(self) -> None:
        self._selection = None

    @contextmanager
    def submitting(self) -> Iterator[None]:
        """Disable submit for the duration of an upload, on every exit path."""
        self._in_flight = True
        try:
            yield
        finally:
            self._in_flight = False


class SyncEngine:
    """Orchestrates list/upload/delete against the remote service."""

    def __init__(
        self,
        remote: RemoteFileService,
        placeholder_text: str | None = None,
        name_max_length: int | None = None,
    ):
        self._remote = remote
        self._files = FileCollection()
        self._placeholder = placeholder_text or settings.placeholder_text
        self._max_length = name_max_length or settings.display_name_max_length
        self._last_result: SyncResult | None = None
        self.control = UploadControl()

    @property
    def files(self) -> FileCollection:
        return self._files

    @property
    def last_result(self) -> SyncResult | None:
        return self._last_result

    def _finish(self, result: SyncResult) -> SyncResult:
        self._last_result = result
        return result

    def _reject(self, message: str) -> SyncResult:
        logger.info("Upload blocked: %s", message)
        return self._finish(SyncResult(SyncOutcome.PRECONDITION_FAILED, message))

    # ---------- operations ----------

    async def initialize(self) -> SyncResult:
        """Rebuild the registry from the remote file list."""
        try:
            infos = await self._remote.list_files()
        except TransportError as e:
            self._files.clear()
            logger.error("Failed to load file list from %s: %s", self._remote.base_url, e)
            return self._finish(
                SyncResult(SyncOutcome.TRANSPORT_ERROR, f"Could not load the file list: {e}")
            )

        self._files.replace_all(FileEntry.from_remote(info) for info in infos)
        logger.info("Loaded %d file(s) from %s", len(self._files), self._remote.base_url)
        return self._finish(SyncResult(SyncOutcome.OK))

    async def upload(
        self,
        selected: SelectedFile | None = None,
        control: UploadControl | None = None,
    ) -> SyncResult:
        """Upload ``selected``, or the control's current selection.

        ``control`` is the selection control the user submitted from. Each
        control gates only its own submissions, so separate tabs or clients
        can upload at the same time. Defaults to the engine's own control.
        """
        control = control or self.control
        if control.in_flight:
            return self._reject("An upload is already in progress.")
        if selected is not None:
            control.select(selected)
        selected = control.selection

        if selected is None:
            return self._reject("Please select a file first.")
        if selected.name in self._files:
            return self._reject(
                f'A file named "{selected.name}" already exists, please choose another file.'
            )

        with control.submitting():
            try:
                resp = await self._remote.upload_file(
                    selected.name, selected.content, selected.content_type,
                )
            except TransportError as e:
                logger.error("Upload of %s failed: %s", selected.name, e)
                return self._finish(
                    SyncResult(SyncOutcome.TRANSPORT_ERROR, f'Upload of "{selected.name}" failed: {e}')
                )

            if not resp.ok:
                logger.error("Upload of %s rejected by server: err=%d", selected.name, resp.err)
                return self._finish(SyncResult(
                    SyncOutcome.BUSINESS_ERROR,
                    f'Upload of "{selected.name}" was rejected: {describe_error(resp.err)}.',
                    error_code=resp.err,
                ))

            # Prefer the name the server stored the file under
            entry = FileEntry(
                name=resp.file_name,
                size_bytes=resp.file_size,
                uploaded_at_unix=resp.upload_date,
            )
            if self._files.remove(entry.name) is not None:
                logger.warning("Server stored %s over an existing entry, replacing it", entry.name)
            self._files.add(entry)
            control.clear()

        logger.info("Uploaded %s (%d bytes)", entry.name, entry.size_bytes)
        return self._finish(SyncResult(SyncOutcome.OK, f'Uploaded "{entry.name}".', entry=entry))

    async def delete(self, file_name: str, confirm: Confirm) -> SyncResult:
        """Delete ``file_name`` after the user confirms.

        ``confirm`` may be sync or async. A confirm hook that raises counts
        as a declined confirmation.
        """
        try:
            answer = confirm(file_name)
            if inspect.isawaitable(answer):
                answer = await answer
        except Exception as e:
            logger.error("Confirmation for deleting %s failed: %s", file_name, e)
            return SyncResult(SyncOutcome.DECLINED)
        if not answer:
            logger.debug("Delete of %s declined", file_name)
            return SyncResult(SyncOutcome.DECLINED)

        try:
            resp = await self._remote.delete_file(file_name)
        except TransportError as e:
            logger.error("Delete of %s failed: %s", file_name, e)
            return self._finish(
                SyncResult(SyncOutcome.TRANSPORT_ERROR, f'Delete of "{file_name}" failed: {e}')
            )

        if not resp.ok:
            logger.error("Delete of %s rejected by server: err=%d", file_name, resp.err)
            return self._finish(SyncResult(
                SyncOutcome.BUSINESS_ERROR,
                f'Delete of "{file_name}" was rejected: {describe_error(resp.err)}.',
                error_code=resp.err,
            ))

        removed = self._files.remove(file_name)
        if removed is None:
            logger.warning("Deleted %s, which was not in the local registry", file_name)
        else:
            logger.info("Deleted %s", file_name)
        return self._finish(SyncResult(SyncOutcome.OK, f'Deleted "{file_name}".', entry=removed))

    # ---------- presentation ----------

    def render(self) -> FileListView:
        return render_file_list(
            self._files,
            self._remote.download_url,
            self._placeholder,
            self._max_length,
        )

    def view(
        self,
        control: UploadControl | None = None,
        result: SyncResult | None = None,
    ) -> WidgetView:
        """Widget state as seen from ``control``, reporting ``result``.

        Both default to the engine's own control and last stored result.
        """
        control = control or self.control
        last = result or self._last_result
        selection = control.selection
        return WidgetView(
            files=self.render(),
            submit_enabled=control.submit_enabled,
            upload_in_flight=control.in_flight,
            selected_name=selection.name if selection else None,
            message=last.message if last else None,
            message_level=("error" if last.is_error else "info") if last and last.message else None,
        )
