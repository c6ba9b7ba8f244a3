"""
Pytest configuration and fixtures.
"""

import os

os.environ.setdefault("ADTAGS_ENV", "test")

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from adtags.common.config import TagSettings
from adtags.tag_server.main import create_app
from adtags.tags import AdTagContext

LEADERBOARD_MAPPING = [
    "[[1024,768],[[970,250],[728,90]]]",
    "[[768,0],[[728,90]]]",
    "[[0,0],[[320,50]]]",
]


@pytest.fixture
def tag_settings() -> TagSettings:
    """Tag settings with container ids restarting at 0 for every context."""
    return TagSettings(container_id_scope="request")


@pytest.fixture
def context(tag_settings: TagSettings) -> AdTagContext:
    """Fresh ad tag context for one simulated request."""
    return AdTagContext(settings=tag_settings, scheme="https")


@pytest_asyncio.fixture(scope="function")
async def client(tag_settings: TagSettings) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client against a freshly built app."""
    app = create_app(tag_settings)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def sample_page_request() -> dict:
    """Page with one responsive placeholder, one hidden-until-called unit."""
    return {
        "network_code": "12345",
        "targeting": {"section": "news", "lang": "en"},
        "size_mappings": [
            {"name": "leader", "variations": LEADERBOARD_MAPPING},
        ],
        "placeholders": [
            {
                "unit_name": "news_top",
                "size": "[[970,250],[728,90]]",
                "css_class": "ad ad-top",
                "size_mapping": "leader",
            },
            {
                "unit_name": "news_mpu",
                "size": "[300,250]",
                "display": False,
            },
        ],
        "ad_units": [
            {"unit_name": "news_oop", "size": "[1,1]", "container_id": "oop-slot"},
        ],
    }
