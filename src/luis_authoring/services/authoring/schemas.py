"""Typed records for LUIS authoring request and response bodies.

Field names are snake_case in Python and camelCase on the wire; unknown
fields returned by the service are kept (``extra="allow"``).
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class LuisRecord(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class TrainingStatus(IntEnum):
    SUCCESS = 0
    FAIL = 1
    UP_TO_DATE = 2
    IN_PROGRESS = 3
    QUEUED = 9


# ---------- request bodies ----------

class EntityLabel(LuisRecord):
    entity_name: str
    start_char_index: int
    end_char_index: int


class LabeledExample(LuisRecord):
    """Example utterance with its intent and entity spans.

    Character offsets are inclusive and zero-based. They are sent as-is; the
    service is the one that rejects spans falling outside ``text``.
    """

    text: str
    intent_name: str
    entity_labels: List[EntityLabel] = Field(default_factory=list)


class ClosedListSublist(LuisRecord):
    id: Optional[int] = None
    canonical_form: str
    synonyms: List[str] = Field(default_factory=list, alias="list")


# ---------- resource infos ----------

class ResourceInfo(LuisRecord):
    id: str
    name: str
    type_id: Optional[int] = None
    readable_type: Optional[str] = None


class AppInfo(ResourceInfo):
    description: Optional[str] = None
    culture: Optional[str] = None
    usage_scenario: Optional[str] = None
    domain: Optional[str] = None
    versions_count: Optional[int] = None
    created_date_time: Optional[str] = None
    endpoint_hits_count: Optional[int] = None
    active_version: Optional[str] = None


class IntentInfo(ResourceInfo):
    pass


class EntityInfo(ResourceInfo):
    pass


class ChildEntityInfo(LuisRecord):
    id: str
    name: str


class HierarchicalEntityInfo(ResourceInfo):
    children: List[ChildEntityInfo] = Field(default_factory=list)


class ClosedListEntityInfo(ResourceInfo):
    sub_lists: List[ClosedListSublist] = Field(default_factory=list)


class PrebuiltEntityInfo(ResourceInfo):
    pass


# ---------- operation results ----------

class OperationStatus(LuisRecord):
    code: Optional[str] = None
    message: Optional[str] = None


class PublishedEndpoint(LuisRecord):
    version_id: Optional[str] = None
    is_staging: Optional[bool] = None
    endpoint_url: str
    region: Optional[str] = None
    assigned_endpoint_key: Optional[Any] = None
    endpoint_region: Optional[str] = None
    published_date_time: Optional[str] = None


class ExampleLabelResult(LuisRecord):
    utterance_text: Optional[str] = Field(default=None, alias="UtteranceText")
    example_id: Optional[int] = Field(default=None, alias="ExampleId")


class ErrorDetail(LuisRecord):
    code: Optional[str] = None
    message: Optional[str] = None


class BatchLabelResult(LuisRecord):
    value: Optional[ExampleLabelResult] = None
    has_error: bool = False
    error: Optional[ErrorDetail] = None


class ReviewEntityLabel(LuisRecord):
    entity_name: str
    start_token_index: int
    end_token_index: int


class IntentPrediction(LuisRecord):
    name: str
    score: Optional[float] = None


class LabeledExampleReview(LuisRecord):
    id: int
    text: str
    tokenized_text: List[str] = Field(default_factory=list)
    intent_label: Optional[str] = None
    entity_labels: List[ReviewEntityLabel] = Field(default_factory=list)
    intent_predictions: List[IntentPrediction] = Field(default_factory=list)
    entity_predictions: List[dict[str, Any]] = Field(default_factory=list)


# ---------- training ----------

class TrainingStatusResponse(LuisRecord):
    status_id: TrainingStatus
    status: Optional[str] = None


class TrainingDetails(LuisRecord):
    status_id: TrainingStatus
    status: Optional[str] = None
    example_count: Optional[int] = None
    failure_reason: Optional[str] = None
    training_date_time: Optional[str] = None


class ModelTrainingStatus(LuisRecord):
    model_config = ConfigDict(protected_namespaces=())

    model_id: str
    details: TrainingDetails


class TrainingResult(LuisRecord):
    success: bool
    status_id: TrainingStatus
    status: Optional[List[ModelTrainingStatus]] = None


__all__ = [
    "AppInfo",
    "BatchLabelResult",
    "ChildEntityInfo",
    "ClosedListEntityInfo",
    "ClosedListSublist",
    "EntityInfo",
    "EntityLabel",
    "ErrorDetail",
    "ExampleLabelResult",
    "HierarchicalEntityInfo",
    "IntentInfo",
    "IntentPrediction",
    "LabeledExample",
    "LabeledExampleReview",
    "LuisRecord",
    "ModelTrainingStatus",
    "OperationStatus",
    "PrebuiltEntityInfo",
    "PublishedEndpoint",
    "ResourceInfo",
    "ReviewEntityLabel",
    "TrainingDetails",
    "TrainingResult",
    "TrainingStatus",
    "TrainingStatusResponse",
]
