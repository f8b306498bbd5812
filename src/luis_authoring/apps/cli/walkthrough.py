"""End-to-end authoring walkthrough: build a sample app, train it, publish it, then remove it."""

from __future__ import annotations

import logging
from typing import Callable, List

from luis_authoring.services.authoring import AuthoringService, Luis, Resolution, endpoint_query_url, get_all_pages
from luis_authoring.services.authoring.schemas import ClosedListSublist, EntityLabel, LabeledExample
from luis_authoring.services.config import LuisConfig

_log = logging.getLogger("luis_authoring.walkthrough")

APP_NAME = "Test"
APP_DESCRIPTION = "A test LUIS app created programmatically"
APP_CULTURE = "en-us"
APP_INITIAL_VERSION = "0.1"

SEARCH_INTENT = "Search"
OBJECT_ENTITY = "Object"
LOCATION_ENTITY = "Location"
LOCATION_CHILDREN = ("From", "To")
SEARCH_TYPE_ENTITY = "SearchType"
DATETIME_PREBUILT = "datetimeV2"

SEARCH_TYPE_SUBLISTS: List[ClosedListSublist] = [
    ClosedListSublist(canonical_form="Flight", synonyms=["Flight", "Plane", "Flight Tickets", "Plane Tickets"]),
    ClosedListSublist(canonical_form="Train", synonyms=["Train", "Train Tickets"]),
    ClosedListSublist(canonical_form="Bus", synonyms=["Bus", "Bus Tickets"]),
]

SAMPLE_UTTERANCES: List[LabeledExample] = [
    LabeledExample(
        text="Search for a flight from Cairo to Redmond next Thursday",
        intent_name=SEARCH_INTENT,
        entity_labels=[
            EntityLabel(entity_name="Location::From", start_char_index=25, end_char_index=29),
            EntityLabel(entity_name="Location::To", start_char_index=34, end_char_index=40),
        ],
    ),
    LabeledExample(
        text="Find plane tickets from Madrid in two days",
        intent_name=SEARCH_INTENT,
        entity_labels=[
            EntityLabel(entity_name="Location::From", start_char_index=24, end_char_index=29),
        ],
    ),
]

Echo = Callable[[str], None]


def _resolved(echo: Echo, label: str, res: Resolution) -> str:
    echo(f"{label} {'created' if res.created else 'found'}: {res.id}")
    return res.id


async def run_walkthrough(luis: Luis, cfg: LuisConfig, echo: Echo = print) -> None:
    service = AuthoringService(luis)

    echo(f"Looking for app {APP_NAME}...")
    app_id = _resolved(
        echo, "App", await service.ensure_application(APP_NAME, APP_DESCRIPTION, APP_CULTURE, APP_INITIAL_VERSION)
    )
    app_info = await luis.apps.get_application_info(app_id)
    version_id = app_info.active_version or APP_INITIAL_VERSION
    echo(f"Active version: {version_id}")

    echo(f"Looking for {SEARCH_INTENT} intent...")
    _resolved(echo, "Intent", await service.ensure_intent(app_id, version_id, SEARCH_INTENT))

    echo(f"Looking for {OBJECT_ENTITY} entity...")
    _resolved(echo, "Entity", await service.ensure_entity(app_id, version_id, OBJECT_ENTITY))

    echo(f"Looking for {LOCATION_ENTITY} hierarchical entity...")
    _resolved(
        echo,
        "Hierarchical entity",
        await service.ensure_hierarchical_entity(app_id, version_id, LOCATION_ENTITY, LOCATION_CHILDREN),
    )

    echo(f"Looking for {SEARCH_TYPE_ENTITY} closed list entity...")
    _resolved(
        echo,
        "Closed list entity",
        await service.ensure_closed_list_entity(app_id, version_id, SEARCH_TYPE_ENTITY, SEARCH_TYPE_SUBLISTS),
    )

    echo(f"Looking for {DATETIME_PREBUILT} prebuilt entity...")
    _resolved(echo, "Prebuilt entity", await service.ensure_prebuilt_entity(app_id, version_id, DATETIME_PREBUILT))

    echo("Adding utterances...")
    for item in await luis.examples.batch_add_labels(app_id, version_id, SAMPLE_UTTERANCES):
        if item.has_error:
            echo(f"  rejected: {item.error.message if item.error else 'unknown error'}")
        elif item.value:
            echo(f"  added #{item.value.example_id}: {item.value.utterance_text}")

    models = luis.models
    listings = (
        ("intents", models.get_version_intent_list),
        ("entities", models.get_version_entity_list),
        ("hierarchical entities", models.get_version_hierarchical_entity_list),
        ("closed list entities", models.get_version_closed_list_list),
        ("prebuilt entities", models.get_version_prebuilt_entity_list),
    )
    for label, lister in listings:
        items = await get_all_pages(lambda skip, take, lister=lister: lister(app_id, version_id, skip, take))
        echo(f"{label.capitalize()}: {', '.join(item.name for item in items) or '-'}")

    echo("Training app...")
    result = await luis.train.train_and_wait(app_id, version_id, timeout=cfg.training_timeout)
    if result.success:
        echo(f"Training finished: {result.status_id.name}")
        echo("Publishing app...")
        published = await luis.apps.publish_application(app_id, version_id, False, cfg.publish_region)
        if cfg.endpoint_key:
            echo(endpoint_query_url(published.endpoint_url, cfg.endpoint_key))
        else:
            echo(published.endpoint_url)
    else:
        echo("Training failed")
        for model in result.status or []:
            echo(f"  {model.model_id}: {model.details.status} {model.details.failure_reason or ''}".rstrip())

    echo("Reviewing utterances...")
    for review in await luis.examples.review_labeled_examples(app_id, version_id):
        echo(f"  [{review.intent_label}] {review.text}")

    echo("Deleting app...")
    deleted = await luis.apps.delete_application(app_id)
    _log.info("deleted application id=%s code=%s", app_id, deleted.code)
    echo(f"Deleted: {deleted.code or 'ok'}")
