# tests/errors/test_app_errors.py
"""Tests for the application error classes and their handlers."""

from unittest.mock import MagicMock

import orjson
import pytest
from fastapi.exceptions import RequestValidationError

from app.errors import (
    BaseAppError,
    DuplicateLikeError,
    ImageTooLargeError,
    RecordNotFoundError,
    ReferencedRecordError,
    RelationSyncError,
    create_exception_handler,
    validation_exception_handler,
)


def mock_request(path: str = "/api/test") -> MagicMock:
    request = MagicMock()
    request.client.host = "192.168.1.1"
    request.url.path = path
    return request


class TestBaseAppError:
    def test_default_values(self) -> None:
        error = BaseAppError()
        assert error.detail == "Internal Server Error"
        assert error.status_code == 500

    def test_str_representation(self) -> None:
        assert str(BaseAppError(detail="Test error")) == "Test error"


class TestRecordNotFoundError:
    def test_names_entity_and_id(self) -> None:
        error = RecordNotFoundError(entity="Tag", record_id="abc")
        assert error.detail == "Tag with ID abc not found"
        assert error.status_code == 404

    def test_entity_only(self) -> None:
        assert RecordNotFoundError(entity="Author").detail == "Author not found"


class TestCreateExceptionHandler:
    @pytest.mark.asyncio
    async def test_handler_with_base_app_error(self) -> None:
        logger = MagicMock()
        handler = create_exception_handler(logger)

        response = await handler(mock_request(), BaseAppError(detail="Test error", status_code=400))

        assert response.status_code == 400
        assert response.body == b'{"detail":"Test error"}'
        logger.warning.assert_called_once_with(
            "Test error for ip: 192.168.1.1 for endpoint /api/test",
        )

    @pytest.mark.asyncio
    async def test_extra_attributes_are_included(self) -> None:
        handler = create_exception_handler(MagicMock())

        response = await handler(mock_request(), ReferencedRecordError("Category", 3))

        assert response.status_code == 400
        assert orjson.loads(response.body) == {
            "detail": "You must remove all the associated blogs before deleting this category",
            "referenced_by": 3,
        }

    @pytest.mark.asyncio
    async def test_duplicate_like_lists_duplicates(self) -> None:
        handler = create_exception_handler(MagicMock())

        response = await handler(mock_request(), DuplicateLikeError(["u1"]))

        assert response.status_code == 409
        assert orjson.loads(response.body)["duplicates"] == ["u1"]

    @pytest.mark.asyncio
    async def test_relation_sync_error(self) -> None:
        handler = create_exception_handler(MagicMock())

        response = await handler(mock_request(), RelationSyncError("Tag.blogs", "t1"))

        assert response.status_code == 500
        assert orjson.loads(response.body) == {
            "detail": "Failed to update Tag.blogs reference on t1",
            "relation": "Tag.blogs",
            "related_id": "t1",
        }

    @pytest.mark.asyncio
    async def test_handler_with_generic_exception(self) -> None:
        handler = create_exception_handler(MagicMock())

        response = await handler(mock_request(), ValueError("Something went wrong"))

        assert response.status_code == 500
        assert orjson.loads(response.body) == {"detail": "Internal Server Error"}


def test_image_too_large_message() -> None:
    error = ImageTooLargeError(max_size_mb=5, actual_size_mb=7.25)

    assert error.status_code == 413
    assert error.detail.endswith("Your file is 7.2MB.")


@pytest.mark.asyncio
async def test_validation_handler_strips_location_prefix() -> None:
    exc = RequestValidationError(
        [
            {
                "loc": ("body", "credit", "sourceURL"),
                "msg": "Input should be a valid URL",
                "type": "url_parsing",
            },
        ],
    )

    response = await validation_exception_handler(mock_request(), exc)

    assert response.status_code == 422
    assert orjson.loads(response.body) == {
        "detail": "Validation failed",
        "errors": [
            {
                "field": "credit.sourceURL",
                "message": "Input should be a valid URL",
                "type": "url_parsing",
            },
        ],
    }
