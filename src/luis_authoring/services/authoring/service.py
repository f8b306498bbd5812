from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from luis_authoring.services.config import LuisConfig

from .apps import AppsAPI
from .client import LuisHttpClient
from .examples import ExamplesAPI
from .models import ModelsAPI
from .paging import Resolution, find_or_create, named
from .schemas import ClosedListSublist
from .train import TrainAPI

_log = logging.getLogger("luis_authoring.service")


@dataclass
class Luis:
    """LUIS Authoring v2.0 client, grouped the way the REST reference groups it."""

    http: LuisHttpClient
    apps: AppsAPI = field(init=False)
    examples: ExamplesAPI = field(init=False)
    models: ModelsAPI = field(init=False)
    train: TrainAPI = field(init=False)

    def __post_init__(self) -> None:
        self.apps = AppsAPI(self.http)
        self.examples = ExamplesAPI(self.http)
        self.models = ModelsAPI(self.http)
        self.train = TrainAPI(self.http)

    @classmethod
    def from_config(cls, cfg: LuisConfig) -> "Luis":
        return cls(LuisHttpClient(base_url=cfg.authoring_url, authoring_key=cfg.authoring_key, timeout=cfg.request_timeout))

    async def aclose(self) -> None:
        await self.http.aclose()

    async def __aenter__(self) -> "Luis":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def _log_resolution(kind: str, name: str, res: Resolution) -> Resolution:
    _log.debug("%s %r %s id=%s", kind, name, "created" if res.created else "found", res.id)
    return res


@dataclass
class AuthoringService:
    """Find-or-create for every resource kind: look a resource up by name and only create it when missing."""

    luis: Luis

    async def ensure_application(
        self, name: str, description: str, culture: str = "en-us", initial_version_id: str = "0.1"
    ) -> Resolution:
        apps = self.luis.apps
        res = await find_or_create(
            apps.get_applications_list,
            named(name),
            lambda: apps.add_application(name, description, culture, initial_version_id),
        )
        return _log_resolution("application", name, res)

    async def ensure_intent(self, app_id: str, version_id: str, name: str) -> Resolution:
        models = self.luis.models
        res = await find_or_create(
            lambda skip, take: models.get_version_intent_list(app_id, version_id, skip, take),
            named(name),
            lambda: models.create_intent(app_id, version_id, name),
        )
        return _log_resolution("intent", name, res)

    async def ensure_entity(self, app_id: str, version_id: str, name: str) -> Resolution:
        models = self.luis.models
        res = await find_or_create(
            lambda skip, take: models.get_version_entity_list(app_id, version_id, skip, take),
            named(name),
            lambda: models.create_entity(app_id, version_id, name),
        )
        return _log_resolution("entity", name, res)

    async def ensure_hierarchical_entity(
        self, app_id: str, version_id: str, name: str, children: Iterable[str]
    ) -> Resolution:
        models = self.luis.models
        res = await find_or_create(
            lambda skip, take: models.get_version_hierarchical_entity_list(app_id, version_id, skip, take),
            named(name),
            lambda: models.create_hierarchical_entity(app_id, version_id, name, children),
        )
        return _log_resolution("hierarchical entity", name, res)

    async def ensure_closed_list_entity(
        self, app_id: str, version_id: str, name: str, sublists: Sequence[ClosedListSublist]
    ) -> Resolution:
        models = self.luis.models
        res = await find_or_create(
            lambda skip, take: models.get_version_closed_list_list(app_id, version_id, skip, take),
            named(name),
            lambda: models.create_closed_list_entity(app_id, version_id, name, sublists),
        )
        return _log_resolution("closed list entity", name, res)

    async def ensure_prebuilt_entity(self, app_id: str, version_id: str, name: str) -> Resolution:
        models = self.luis.models

        async def _add() -> str:
            added = await models.add_prebuilt_entity_list(app_id, version_id, [name])
            for info in added:
                if info.name == name:
                    return info.id
            raise RuntimeError(f"service did not report prebuilt entity {name!r} as added")

        res = await find_or_create(
            lambda skip, take: models.get_version_prebuilt_entity_list(app_id, version_id, skip, take),
            named(name),
            _add,
        )
        return _log_resolution("prebuilt entity", name, res)


__all__ = ["AuthoringService", "Luis"]
