"""Client for the LUIS Authoring v2.0 REST API."""

from __future__ import annotations

from .apps import AppsAPI, endpoint_query_url
from .client import LuisHttpClient, LuisHttpError
from .examples import ExamplesAPI
from .models import ModelsAPI
from .paging import Resolution, find_in_all_pages, find_or_create, get_all_pages
from .service import AuthoringService, Luis
from .train import TrainAPI, TrainingTimeoutError, summarize_training

__all__ = [
    "AppsAPI",
    "AuthoringService",
    "ExamplesAPI",
    "Luis",
    "LuisHttpClient",
    "LuisHttpError",
    "ModelsAPI",
    "Resolution",
    "TrainAPI",
    "TrainingTimeoutError",
    "endpoint_query_url",
    "find_in_all_pages",
    "find_or_create",
    "get_all_pages",
    "summarize_training",
]
