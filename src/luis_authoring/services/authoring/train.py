from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

import anyio

from .client import LuisHttpClient
from .schemas import ModelTrainingStatus, TrainingResult, TrainingStatus, TrainingStatusResponse

_log = logging.getLogger("luis_authoring.train")

TRAINING_POLL_INTERVAL = 0.5


class TrainingTimeoutError(RuntimeError):
    def __init__(self, message: str, *, last_status: Sequence[ModelTrainingStatus] | None = None):
        super().__init__(message)
        self.last_status = list(last_status or [])


def _any_status(statuses: Sequence[ModelTrainingStatus], status_id: TrainingStatus) -> bool:
    return any(s.details.status_id == status_id for s in statuses)


def summarize_training(statuses: Sequence[ModelTrainingStatus]) -> TrainingResult:
    """Fold the per-model statuses of a finished training run into one result."""
    if _any_status(statuses, TrainingStatus.FAIL):
        return TrainingResult(success=False, status_id=TrainingStatus.FAIL, status=list(statuses))
    if all(s.details.status_id == TrainingStatus.UP_TO_DATE for s in statuses):
        return TrainingResult(success=True, status_id=TrainingStatus.UP_TO_DATE)
    return TrainingResult(success=True, status_id=TrainingStatus.SUCCESS)


@dataclass
class TrainAPI:
    http: LuisHttpClient
    poll_interval: float = TRAINING_POLL_INTERVAL

    def _path(self, app_id: str, version_id: str) -> str:
        return f"{app_id}/versions/{version_id}/train"

    async def get_version_training_status(self, app_id: str, version_id: str) -> List[ModelTrainingStatus]:
        """Training status of every model (intent or entity) in the version."""
        result = await self.http.get(self._path(app_id, version_id))
        if isinstance(result, list):
            return [ModelTrainingStatus.model_validate(item) for item in result]
        return []

    async def train_version(self, app_id: str, version_id: str) -> TrainingStatusResponse:
        """Queue a training request. A ``Queued`` answer means the status has to be polled."""
        return TrainingStatusResponse.model_validate(await self.http.post(self._path(app_id, version_id)))

    async def train_and_wait(
        self,
        app_id: str,
        version_id: str,
        *,
        max_polls: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> TrainingResult:
        """
        Train the version and wait until no model is ``InProgress`` anymore.

        Without ``max_polls`` or ``timeout`` the wait is unbounded. When either
        bound is hit, :class:`TrainingTimeoutError` is raised with the last
        status list seen. The wait can also be cancelled through the enclosing
        anyio cancel scope.
        """
        initial = await self.train_version(app_id, version_id)
        _log.debug("training requested app=%s version=%s status=%s", app_id, version_id, initial.status_id.name)
        if initial.status_id == TrainingStatus.UP_TO_DATE:
            return TrainingResult(success=True, status_id=TrainingStatus.UP_TO_DATE)
        if initial.status_id != TrainingStatus.QUEUED:
            _log.warning("unexpected initial training status %s app=%s", initial.status_id.name, app_id)
            return TrainingResult(success=False, status_id=TrainingStatus.FAIL)

        statuses: List[ModelTrainingStatus] = []
        polls = 0
        try:
            with anyio.fail_after(timeout):
                while True:
                    if max_polls is not None and polls >= max_polls:
                        raise TrainingTimeoutError(
                            f"training still in progress after {polls} polls", last_status=statuses
                        )
                    await anyio.sleep(self.poll_interval)
                    statuses = await self.get_version_training_status(app_id, version_id)
                    polls += 1
                    _log.debug("training poll %d app=%s models=%d", polls, app_id, len(statuses))
                    if not _any_status(statuses, TrainingStatus.IN_PROGRESS):
                        break
        except TimeoutError as exc:
            raise TrainingTimeoutError(
                f"training still in progress after {timeout}s", last_status=statuses
            ) from exc

        result = summarize_training(statuses)
        if result.success:
            _log.info("training finished app=%s status=%s polls=%d", app_id, result.status_id.name, polls)
        else:
            _log.warning("training failed app=%s polls=%d", app_id, polls)
        return result


__all__ = ["TRAINING_POLL_INTERVAL", "TrainAPI", "TrainingTimeoutError", "summarize_training"]
