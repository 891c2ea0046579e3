"""Bounded worker pool running preview jobs in the background."""

from __future__ import annotations

import logging
import threading
import uuid
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import wait as wait_futures
from dataclasses import dataclass
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError

from ..exceptions import SchedulerClosedError
from ..settings.settings_models import PluginConfiguration
from ..storage.storage_models import FileInfo
from .preview_models import PreviewFailureReason
from .preview_repository import PreviewLinkRepository

logger = logging.getLogger(__name__)


class PreviewRunner(Protocol):
    def run(self, source: FileInfo, config: PluginConfiguration, job_id: str) -> str | None: ...


@dataclass(slots=True)
class PreviewTicket:
    """Handle returned for every submitted job."""

    job_id: str
    file_id: str
    future: Future


class PreviewScheduler:
    """Submit preview jobs to a fixed-size thread pool.

    Submission never blocks: jobs beyond ``max_workers`` wait in the executor
    queue. In-flight jobs are tracked by job id until they finish, so they can
    be listed, awaited and cancelled while still queued.
    """

    def __init__(
        self,
        *,
        runner: PreviewRunner,
        links: PreviewLinkRepository,
        max_workers: int = 4,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._runner = runner
        self._links = links
        self._max_workers = max(1, max_workers)
        self._executor = ThreadPoolExecutor(
            max_workers=self._max_workers, thread_name_prefix="preview"
        )
        self._id_factory = id_factory or (lambda: uuid.uuid4().hex)
        self._tickets: dict[str, PreviewTicket] = {}
        self._lock = threading.Lock()
        self._closed = False
        self._logger = logging.getLogger(__name__)

    @property
    def max_workers(self) -> int:
        return self._max_workers

    @property
    def closed(self) -> bool:
        return self._closed

    def submit(self, source: FileInfo, config: PluginConfiguration) -> PreviewTicket:
        with self._lock:
            if self._closed:
                raise SchedulerClosedError("Preview scheduler is shut down")

            job_id = self._id_factory()
            self._record(self._links.mark_pending, source.id, job_id)
            try:
                future = self._executor.submit(self._runner.run, source, config, job_id)
            except RuntimeError as exc:
                self._record(
                    self._links.mark_failed,
                    source.id,
                    job_id,
                    PreviewFailureReason.CANCELLED,
                )
                raise SchedulerClosedError("Preview scheduler is shut down") from exc

            ticket = PreviewTicket(job_id=job_id, file_id=source.id, future=future)
            self._tickets[job_id] = ticket
        future.add_done_callback(lambda _: self._finalize(ticket))
        self._logger.info(
            "preview.job.scheduled",
            extra={"file_id": source.id, "job_id": job_id, "file_name": source.name},
        )
        return ticket

    def in_flight(self) -> list[PreviewTicket]:
        with self._lock:
            return list(self._tickets.values())

    def cancel(self, job_id: str) -> bool:
        """Cancel a queued job; running jobs are left to finish."""
        with self._lock:
            ticket = self._tickets.get(job_id)
        if ticket is None:
            return False
        return ticket.future.cancel()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until every in-flight job finishes; False on timeout."""
        futures = [ticket.future for ticket in self.in_flight()]
        if not futures:
            return True
        _, not_done = wait_futures(futures, timeout=timeout)
        return not not_done

    def shutdown(self, *, wait: bool = False, cancel_pending: bool = True) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            in_flight = len(self._tickets)
        self._logger.info(
            "preview.scheduler.shutdown",
            extra={"in_flight": in_flight, "cancel_pending": cancel_pending},
        )
        self._executor.shutdown(wait=wait, cancel_futures=cancel_pending)

    def _finalize(self, ticket: PreviewTicket) -> None:
        with self._lock:
            self._tickets.pop(ticket.job_id, None)
        if not ticket.future.cancelled():
            return
        self._logger.warning(
            "preview.job.cancelled",
            extra={"file_id": ticket.file_id, "job_id": ticket.job_id},
        )
        self._record(
            self._links.mark_failed,
            ticket.file_id,
            ticket.job_id,
            PreviewFailureReason.CANCELLED,
        )

    def _record(self, method, file_id: str, job_id: str, *args) -> None:
        try:
            method(file_id, job_id, *args)
        except SQLAlchemyError as exc:
            self._logger.error(
                "preview.link.write_failed",
                extra={"file_id": file_id, "job_id": job_id, "error": str(exc)},
            )
