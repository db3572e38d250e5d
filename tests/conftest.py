"""Shared fixtures for skillshare tests."""

import json

import httpx
import pytest

from skillstream.config import Settings
from skillstream.skillshare.client import SkillshareClient
from skillstream.skillshare.provider import SkillshareProvider

PRIMARY = "https://skillshare.techtanic.xyz/id"
FALLBACK = "https://skillshare-api.heckernohecking.repl.co"


def node(id, title="Class", sku=None, **extra):
    """A GraphQL class node as the API returns it."""
    data = {
        "id": id,
        "title": title,
        "url": f"https://www.skillshare.com/classes/{id}",
        "sku": sku if sku is not None else f"sku-{id}",
        "smallCoverUrl": f"https://static.skillshare.com/{id}/small.jpg",
        "largeCoverUrl": f"https://static.skillshare.com/{id}/large.jpg",
    }
    data.update(extra)
    return data


def listing_body(nodes):
    return json.dumps({"data": {"classListByType": {"nodes": nodes}}})


def search_body(nodes):
    return json.dumps({"data": {"search": {"edges": [{"node": n} for n in nodes]}}})


def bypass_body(title="Class", thumbnail=None, lessons=()):
    return json.dumps(
        {"class": title, "class_thumbnail": thumbnail, "lessons": list(lessons)}
    )


@pytest.fixture
def settings(tmp_path):
    return Settings(cursor_state_path=tmp_path / "cursors.json")


@pytest.fixture
def make_provider(settings):
    """Build a provider whose HTTP requests are answered by ``handler``."""
    providers = []

    def _make(handler):
        client = SkillshareClient(settings, transport=httpx.MockTransport(handler))
        provider = SkillshareProvider(settings, client=client)
        providers.append(provider)
        return provider

    yield _make
    for provider in providers:
        provider.close()
