# tests/routes/conftest.py
"""Request helpers shared by the route tests."""

from typing import Any

import pytest
from httpx import AsyncClient

from app.models import ImageFileDB


class Api:
    """Thin wrapper that creates records through the public routes."""

    def __init__(self, client: AsyncClient, headers: dict[str, str], image: ImageFileDB) -> None:
        self.client = client
        self.headers = headers
        self.image = image

    async def category(self, name: str) -> dict[str, Any]:
        response = await self.client.post(
            "/categories",
            json={"name": name},
            headers=self.headers,
        )
        assert response.status_code == 201, response.text
        return response.json()

    async def tag(self, name: str) -> dict[str, Any]:
        response = await self.client.post("/tags", json={"name": name}, headers=self.headers)
        assert response.status_code == 201, response.text
        return response.json()

    async def blog(
        self,
        title: str,
        action: str = "publish",
        category: str | None = None,
        tags: list[str] | None = None,
    ) -> dict[str, Any]:
        data: dict[str, Any] = {
            "title": title,
            "content": f"<p>{title}</p>",
            "existingImageId": str(self.image.id),
        }
        if category:
            data["category"] = category
        if tags:
            data["tags"] = tags
        response = await self.client.post(f"/blogs/{action}", data=data, headers=self.headers)
        assert response.status_code == 201, response.text
        return response.json()


@pytest.fixture
def api(client: AsyncClient, author_headers: dict[str, str], image: ImageFileDB) -> Api:
    return Api(client, author_headers, image)
