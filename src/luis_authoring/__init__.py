"""Client and walkthrough for the LUIS Authoring v2.0 REST API."""

__version__ = "0.1.0"
