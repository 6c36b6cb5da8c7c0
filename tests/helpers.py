import asyncio
import copy
import json

import httpx

SAMPLE_ITEM = {
    "id": "1",
    "title": "Test Article",
    "body": "Test content",
    "rendered_body": "<p>Test content</p>",
    "coediting": False,
    "comments_count": 5,
    "created_at": "2023-01-01T00:00:00Z",
    "group": None,
    "likes_count": 10,
    "private": False,
    "reactions_count": 2,
    "tags": [{"name": "JavaScript", "versions": []}],
    "updated_at": "2023-01-02T00:00:00Z",
    "url": "https://qiita.com/test/items/1",
    "user": {
        "description": "Test user",
        "facebook_id": None,
        "followees_count": 100,
        "followers_count": 200,
        "github_login_name": "testuser",
        "id": "user1",
        "items_count": 50,
        "linkedin_id": None,
        "location": "Tokyo",
        "name": "Test User",
        "organization": "Test Org",
        "permanent_id": 12345,
        "profile_image_url": "https://example.com/avatar.png",
        "team_only": False,
        "twitter_screen_name": "testuser",
        "website_url": "https://example.com",
    },
    "page_views_count": 1000,
    "team_membership": None,
    "organization_url_name": None,
    "slide": False,
}

TEST_BASE_URL = "https://qiita.test/api/v2"


def sample_item(**overrides):
    item = copy.deepcopy(SAMPLE_ITEM)
    item.update(overrides)
    return item


class FakeQiita:
    """Records every request and answers with a fixed status and JSON body."""

    def __init__(self, status_code=200, payload=()):
        self.status_code = status_code
        self.payload = payload
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, content=json.dumps(self.payload).encode())

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


def run_with_client(fake, call):
    """Run `call(client)` (a coroutine factory) against the fake upstream."""

    async def runner():
        async with fake.client() as client:
            return await call(client)

    return asyncio.run(runner())
