from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

import httpx

from .client import LuisHttpClient
from .paging import PAGE_SIZE, find_in_all_pages, named
from .schemas import AppInfo, OperationStatus, PublishedEndpoint

_log = logging.getLogger("luis_authoring.apps")


def endpoint_query_url(endpoint_url: str, endpoint_key: str) -> str:
    """Runtime prediction URL for a published app, ready to have a query appended."""
    url = httpx.URL(
        endpoint_url,
        params={"subscription-key": endpoint_key, "verbose": "true", "timezoneOffset": "0", "q": ""},
    )
    return str(url)


@dataclass
class AppsAPI:
    http: LuisHttpClient

    async def add_application(
        self,
        name: str,
        description: str,
        culture: str,
        initial_version_id: str,
        usage_scenario: Optional[str] = None,
        domain: Optional[str] = None,
    ) -> str:
        payload: dict[str, Any] = {
            "name": name,
            "description": description,
            "culture": culture,
            "initialVersionId": initial_version_id,
        }
        if usage_scenario:
            payload["usageScenario"] = usage_scenario
        if domain:
            payload["domain"] = domain
        app_id = str(await self.http.post("", payload))
        _log.info("created application name=%s id=%s", name, app_id)
        return app_id

    async def delete_application(self, app_id: str) -> OperationStatus:
        result = await self.http.delete(app_id)
        return OperationStatus.model_validate(result or {})

    async def get_application_info(self, app_id: str) -> AppInfo:
        return AppInfo.model_validate(await self.http.get(app_id))

    async def get_applications_list(self, skip: int = 0, take: int = PAGE_SIZE) -> List[AppInfo]:
        result = await self.http.get("", params={"skip": skip, "take": take})
        if isinstance(result, list):
            return [AppInfo.model_validate(item) for item in result]
        return []

    async def find_application(self, name: str) -> Optional[str]:
        return await find_in_all_pages(self.get_applications_list, named(name))

    async def publish_application(self, app_id: str, version_id: str, is_staging: bool, region: str) -> PublishedEndpoint:
        """Publish ``version_id``. ``region`` may be a comma-separated list of regions."""
        result = await self.http.post(
            f"{app_id}/publish",
            {"versionId": version_id, "isStaging": is_staging, "region": region},
        )
        endpoint = PublishedEndpoint.model_validate(result)
        _log.info("published application id=%s version=%s region=%s", app_id, version_id, region)
        return endpoint


__all__ = ["AppsAPI", "endpoint_query_url"]
