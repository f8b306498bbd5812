from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from .client import LuisHttpClient
from .paging import PAGE_SIZE
from .schemas import BatchLabelResult, ExampleLabelResult, LabeledExample, LabeledExampleReview


def _version_path(app_id: str, version_id: str, suffix: str) -> str:
    return f"{app_id}/versions/{version_id}/{suffix}"


@dataclass
class ExamplesAPI:
    """Example utterances. Labels go to the service unchanged; offsets are not checked here."""

    http: LuisHttpClient

    async def add_label(self, app_id: str, version_id: str, utterance: LabeledExample) -> ExampleLabelResult:
        result = await self.http.post(_version_path(app_id, version_id, "example"), utterance.to_payload())
        return ExampleLabelResult.model_validate(result or {})

    async def batch_add_labels(
        self, app_id: str, version_id: str, utterances: Iterable[LabeledExample]
    ) -> List[BatchLabelResult]:
        """
        Add up to 100 non-duplicate labeled examples in one call. Items succeed
        or fail independently; check ``has_error`` on each result.
        """
        payload = [u.to_payload() for u in utterances]
        result = await self.http.post(_version_path(app_id, version_id, "examples"), payload)
        if isinstance(result, list):
            return [BatchLabelResult.model_validate(item) for item in result]
        return []

    async def review_labeled_examples(
        self, app_id: str, version_id: str, skip: int = 0, take: int = PAGE_SIZE
    ) -> List[LabeledExampleReview]:
        result = await self.http.get(
            _version_path(app_id, version_id, "examples"), params={"skip": skip, "take": take}
        )
        if isinstance(result, list):
            return [LabeledExampleReview.model_validate(item) for item in result]
        return []


__all__ = ["ExamplesAPI"]
