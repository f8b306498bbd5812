from __future__ import annotations

import json
import uuid
from collections import defaultdict
from typing import Any, Dict, List, Tuple

import httpx
import pytest

from luis_authoring.services.authoring import Luis, LuisHttpClient

BASE_URL = "https://westus.api.cognitive.microsoft.com/luis/api/v2.0/apps/"
BASE_PATH = "/luis/api/v2.0/apps"
AUTHORING_KEY = "test-authoring-key"

COLLECTIONS = ("intents", "entities", "hierarchicalentities", "closedlists", "prebuilts")


class FakeLuisService:
    """In-memory stand-in for the authoring API, served through httpx.MockTransport."""

    def __init__(self) -> None:
        self.apps: Dict[str, Dict[str, Any]] = {}
        self.models: Dict[Tuple[str, str, str], List[Dict[str, Any]]] = defaultdict(list)
        self.examples: Dict[Tuple[str, str], List[Dict[str, Any]]] = defaultdict(list)
        self.requests: List[Tuple[str, str]] = []
        self.bodies: List[Any] = []
        self.headers: List[httpx.Headers] = []
        self.train_initial: Dict[str, Any] = {"statusId": 2, "status": "UpToDate"}
        self.train_polls: List[List[Dict[str, Any]]] = []
        self.batch_response: List[Dict[str, Any]] | None = None

    # helpers for tests
    def count(self, method: str, suffix: str = "") -> int:
        return sum(1 for m, p in self.requests if m == method and p.endswith(suffix))

    def add_app(self, name: str, version: str = "0.1") -> str:
        app_id = str(uuid.uuid4())
        self.apps[app_id] = {"id": app_id, "name": name, "activeVersion": version, "culture": "en-us"}
        return app_id

    def add_model(self, app_id: str, version: str, collection: str, name: str, **extra: Any) -> str:
        model_id = str(uuid.uuid4())
        self.models[(app_id, version, collection)].append({"id": model_id, "name": name, **extra})
        return model_id

    # transport
    def handle(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.requests.append((request.method, path))
        self.headers.append(request.headers)
        body = json.loads(request.content) if request.content else None
        self.bodies.append(body)
        parts = [p for p in path[len(BASE_PATH):].split("/") if p]
        params = request.url.params
        skip = int(params.get("skip", 0))
        take = int(params.get("take", 100))

        if not parts:
            if request.method == "GET":
                return httpx.Response(200, json=list(self.apps.values())[skip:skip + take])
            if any(a["name"] == body["name"] for a in self.apps.values()):
                return _error(400, "BadArgument", "An application with the same name already exists")
            app_id = self.add_app(body["name"], body["initialVersionId"])
            return httpx.Response(201, json=app_id)

        app_id = parts[0]
        if app_id not in self.apps:
            return _error(404, "NotFound", "The application ID was not found")
        if len(parts) == 1:
            if request.method == "DELETE":
                del self.apps[app_id]
                return httpx.Response(200, json={"code": "Success", "message": "Operation Successful"})
            return httpx.Response(200, json=self.apps[app_id])
        if parts[1] == "publish":
            return httpx.Response(
                201,
                json={
                    "versionId": body["versionId"],
                    "isStaging": body["isStaging"],
                    "endpointUrl": f"https://{body['region']}.api.cognitive.microsoft.com/luis/v2.0/apps/{app_id}",
                    "region": body["region"],
                    "endpointRegion": body["region"],
                },
            )

        version, resource = parts[2], parts[3]
        if resource in COLLECTIONS:
            key = (app_id, version, resource)
            if len(parts) == 5:
                self.models[key] = [m for m in self.models[key] if m["id"] != parts[4]]
                return httpx.Response(200, json={"code": "Success", "message": "Operation Successful"})
            if request.method == "GET":
                return httpx.Response(200, json=self.models[key][skip:skip + take])
            if resource == "prebuilts":
                added = [{"id": self.add_model(app_id, version, resource, n), "name": n} for n in body]
                return httpx.Response(201, json=added)
            extra: Dict[str, Any] = {}
            if resource == "hierarchicalentities":
                extra["children"] = [{"id": str(uuid.uuid4()), "name": c} for c in body["children"]]
            elif resource == "closedlists":
                extra["subLists"] = [{"id": i + 1, **s} for i, s in enumerate(body["sublists"])]
            return httpx.Response(201, json=self.add_model(app_id, version, resource, body["name"], **extra))
        if resource == "example":
            self.examples[(app_id, version)].append(body)
            return httpx.Response(201, json={"UtteranceText": body["text"], "ExampleId": len(self.examples[(app_id, version)])})
        if resource == "examples":
            stored = self.examples[(app_id, version)]
            if request.method == "POST":
                if self.batch_response is not None:
                    return httpx.Response(201, json=self.batch_response)
                results = []
                for item in body:
                    stored.append(item)
                    results.append({"value": {"UtteranceText": item["text"], "ExampleId": len(stored)}, "hasError": False})
                return httpx.Response(201, json=results)
            reviews = [
                {"id": i + 1, "text": e["text"], "tokenizedText": e["text"].split(), "intentLabel": e["intentName"]}
                for i, e in enumerate(stored)
            ]
            return httpx.Response(200, json=reviews[skip:skip + take])
        if resource == "train":
            if request.method == "POST":
                return httpx.Response(202, json=self.train_initial)
            polls = self.train_polls
            status = polls.pop(0) if len(polls) > 1 else (polls[0] if polls else [])
            return httpx.Response(200, json=status)
        return _error(404, "NotFound", f"unknown resource {resource}")


def _error(status: int, code: str, message: str) -> httpx.Response:
    return httpx.Response(status, json={"error": {"code": code, "message": message}})


def model_status(status_id: int, model_id: str | None = None, **details: Any) -> Dict[str, Any]:
    return {"modelId": model_id or str(uuid.uuid4()), "details": {"statusId": status_id, "exampleCount": 0, **details}}


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def fake_service() -> FakeLuisService:
    return FakeLuisService()


@pytest.fixture
def http_client(fake_service) -> LuisHttpClient:
    transport = httpx.MockTransport(fake_service.handle)
    return LuisHttpClient(
        base_url=BASE_URL,
        authoring_key=AUTHORING_KEY,
        _client=httpx.AsyncClient(base_url=BASE_URL, transport=transport),
    )


@pytest.fixture
def luis(http_client) -> Luis:
    luis = Luis(http_client)
    luis.train.poll_interval = 0
    return luis
