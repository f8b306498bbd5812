"""Intent and entity models of an application version."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Type, TypeVar

from .client import LuisHttpClient
from .paging import PAGE_SIZE, find_in_all_pages, named
from .schemas import (
    ClosedListEntityInfo,
    ClosedListSublist,
    EntityInfo,
    HierarchicalEntityInfo,
    IntentInfo,
    OperationStatus,
    PrebuiltEntityInfo,
    ResourceInfo,
)

_log = logging.getLogger("luis_authoring.models")

R = TypeVar("R", bound=ResourceInfo)

INTENTS = "intents"
ENTITIES = "entities"
HIERARCHICAL_ENTITIES = "hierarchicalentities"
CLOSED_LISTS = "closedlists"
PREBUILTS = "prebuilts"


def _ensure_unique_canonical_forms(sublists: Sequence[ClosedListSublist]) -> None:
    seen: set[str] = set()
    for sublist in sublists:
        if sublist.canonical_form in seen:
            raise ValueError(f"duplicate canonical form in closed list: {sublist.canonical_form!r}")
        seen.add(sublist.canonical_form)


@dataclass
class ModelsAPI:
    http: LuisHttpClient

    def _path(self, app_id: str, version_id: str, collection: str, model_id: str | None = None) -> str:
        path = f"{app_id}/versions/{version_id}/{collection}"
        return f"{path}/{model_id}" if model_id else path

    async def _create(self, app_id: str, version_id: str, collection: str, payload: Any) -> str:
        model_id = str(await self.http.post(self._path(app_id, version_id, collection), payload))
        _log.info("created %s model id=%s app=%s version=%s", collection, model_id, app_id, version_id)
        return model_id

    async def _list(
        self, app_id: str, version_id: str, collection: str, record: Type[R], skip: int, take: int
    ) -> List[R]:
        result = await self.http.get(
            self._path(app_id, version_id, collection), params={"skip": skip, "take": take}
        )
        if isinstance(result, list):
            return [record.model_validate(item) for item in result]
        return []

    async def _delete(
        self,
        app_id: str,
        version_id: str,
        collection: str,
        model_id: str,
        params: Mapping[str, Any] | None = None,
    ) -> OperationStatus:
        result = await self.http.delete(self._path(app_id, version_id, collection, model_id), params=params)
        return OperationStatus.model_validate(result or {})

    # Intents
    async def create_intent(self, app_id: str, version_id: str, intent_name: str) -> str:
        return await self._create(app_id, version_id, INTENTS, {"name": intent_name})

    async def get_version_intent_list(
        self, app_id: str, version_id: str, skip: int = 0, take: int = PAGE_SIZE
    ) -> List[IntentInfo]:
        return await self._list(app_id, version_id, INTENTS, IntentInfo, skip, take)

    async def find_version_intent(self, app_id: str, version_id: str, intent_name: str) -> Optional[str]:
        return await find_in_all_pages(
            lambda skip, take: self.get_version_intent_list(app_id, version_id, skip, take),
            named(intent_name),
        )

    async def delete_intent(
        self, app_id: str, version_id: str, intent_id: str, delete_utterances: bool = False
    ) -> OperationStatus:
        """With ``delete_utterances`` false the intent's utterances move to the None intent."""
        return await self._delete(
            app_id, version_id, INTENTS, intent_id, params={"deleteUtterances": delete_utterances}
        )

    # Simple entities
    async def create_entity(self, app_id: str, version_id: str, entity_name: str) -> str:
        return await self._create(app_id, version_id, ENTITIES, {"name": entity_name})

    async def get_version_entity_list(
        self, app_id: str, version_id: str, skip: int = 0, take: int = PAGE_SIZE
    ) -> List[EntityInfo]:
        return await self._list(app_id, version_id, ENTITIES, EntityInfo, skip, take)

    async def find_version_entity(self, app_id: str, version_id: str, entity_name: str) -> Optional[str]:
        return await find_in_all_pages(
            lambda skip, take: self.get_version_entity_list(app_id, version_id, skip, take),
            named(entity_name),
        )

    async def delete_entity(self, app_id: str, version_id: str, entity_id: str) -> OperationStatus:
        return await self._delete(app_id, version_id, ENTITIES, entity_id)

    # Hierarchical entities
    async def create_hierarchical_entity(
        self, app_id: str, version_id: str, entity_name: str, children: Iterable[str]
    ) -> str:
        return await self._create(
            app_id, version_id, HIERARCHICAL_ENTITIES, {"name": entity_name, "children": list(children)}
        )

    async def get_version_hierarchical_entity_list(
        self, app_id: str, version_id: str, skip: int = 0, take: int = PAGE_SIZE
    ) -> List[HierarchicalEntityInfo]:
        return await self._list(app_id, version_id, HIERARCHICAL_ENTITIES, HierarchicalEntityInfo, skip, take)

    async def find_version_hierarchical_entity(
        self, app_id: str, version_id: str, entity_name: str
    ) -> Optional[str]:
        return await find_in_all_pages(
            lambda skip, take: self.get_version_hierarchical_entity_list(app_id, version_id, skip, take),
            named(entity_name),
        )

    async def delete_hierarchical_entity(self, app_id: str, version_id: str, h_entity_id: str) -> OperationStatus:
        return await self._delete(app_id, version_id, HIERARCHICAL_ENTITIES, h_entity_id)

    # Closed lists
    async def create_closed_list_entity(
        self, app_id: str, version_id: str, entity_name: str, sublists: Sequence[ClosedListSublist]
    ) -> str:
        _ensure_unique_canonical_forms(sublists)
        payload = {"name": entity_name, "sublists": [s.to_payload() for s in sublists]}
        return await self._create(app_id, version_id, CLOSED_LISTS, payload)

    async def get_version_closed_list_list(
        self, app_id: str, version_id: str, skip: int = 0, take: int = PAGE_SIZE
    ) -> List[ClosedListEntityInfo]:
        return await self._list(app_id, version_id, CLOSED_LISTS, ClosedListEntityInfo, skip, take)

    async def find_version_closed_list_entity(
        self, app_id: str, version_id: str, entity_name: str
    ) -> Optional[str]:
        return await find_in_all_pages(
            lambda skip, take: self.get_version_closed_list_list(app_id, version_id, skip, take),
            named(entity_name),
        )

    async def delete_closed_list_entity(self, app_id: str, version_id: str, cl_entity_id: str) -> OperationStatus:
        return await self._delete(app_id, version_id, CLOSED_LISTS, cl_entity_id)

    # Prebuilt entities
    async def add_prebuilt_entity_list(
        self, app_id: str, version_id: str, entity_names: Iterable[str]
    ) -> List[PrebuiltEntityInfo]:
        """Enable built-in extractors by name, e.g. ``["datetimeV2"]``."""
        result = await self.http.post(self._path(app_id, version_id, PREBUILTS), list(entity_names))
        if isinstance(result, list):
            added = [PrebuiltEntityInfo.model_validate(item) for item in result]
            _log.info("added prebuilt entities %s app=%s", [p.name for p in added], app_id)
            return added
        return []

    async def get_version_prebuilt_entity_list(
        self, app_id: str, version_id: str, skip: int = 0, take: int = PAGE_SIZE
    ) -> List[PrebuiltEntityInfo]:
        return await self._list(app_id, version_id, PREBUILTS, PrebuiltEntityInfo, skip, take)

    async def find_version_prebuilt_entity(
        self, app_id: str, version_id: str, entity_name: str
    ) -> Optional[str]:
        return await find_in_all_pages(
            lambda skip, take: self.get_version_prebuilt_entity_list(app_id, version_id, skip, take),
            named(entity_name),
        )

    async def delete_prebuilt_entity(self, app_id: str, version_id: str, prebuilt_id: str) -> OperationStatus:
        return await self._delete(app_id, version_id, PREBUILTS, prebuilt_id)


__all__ = ["ModelsAPI"]
