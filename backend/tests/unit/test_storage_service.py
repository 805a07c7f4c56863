import logging
import pytest
from unittest.mock import MagicMock, patch
from google.api_core.exceptions import NotFound

from catalog.errors import ErrorType
from catalog.exceptions import AppException
from catalog.services.storage_service import StorageService, extract_object_path

IMAGE_URL = (
    "https://firebasestorage.googleapis.com/v0/b/shop.appspot.com/o/"
    "products%2Fsummer%20sale.png?alt=media&token=abc"
)


class TestExtractObjectPath:
    def test_decodes_path_and_drops_query(self):
        assert extract_object_path(IMAGE_URL) == "products/summer sale.png"

    def test_url_without_query(self):
        url = "https://firebasestorage.googleapis.com/v0/b/shop/o/banner.jpg"
        assert extract_object_path(url) == "banner.jpg"

    def test_url_without_delimiter(self):
        assert extract_object_path("https://cdn.example.com/banner.jpg") is None


class TestDeleteByUrl:
    @pytest.mark.asyncio
    async def test_deletes_blob(self):
        bucket = MagicMock()
        await StorageService(bucket).delete_by_url(IMAGE_URL)

        bucket.blob.assert_called_once_with("products/summer sale.png")
        bucket.blob.return_value.delete.assert_called_once()

    @pytest.mark.asyncio
    async def test_malformed_url_is_noop(self):
        bucket = MagicMock()
        await StorageService(bucket).delete_by_url("not-a-storage-url")

        bucket.blob.assert_not_called()

    @pytest.mark.asyncio
    async def test_empty_url_is_noop(self):
        bucket = MagicMock()
        await StorageService(bucket).delete_by_url("")

        bucket.blob.assert_not_called()

    @pytest.mark.asyncio
    async def test_api_error_propagates(self):
        bucket = MagicMock()
        bucket.blob.return_value.delete.side_effect = NotFound("No such object")

        with pytest.raises(AppException) as exc_info:
            await StorageService(bucket).delete_by_url(IMAGE_URL)

        assert exc_info.value.error_type == ErrorType.STORAGE_ERROR

    @pytest.mark.asyncio
    async def test_no_bucket_configured(self):
        with pytest.raises(AppException) as exc_info:
            await StorageService().delete_by_url(IMAGE_URL)

        assert exc_info.value.error_type == ErrorType.NOT_CONFIGURED


class TestDiscardImage:
    @pytest.mark.asyncio
    async def test_success(self):
        bucket = MagicMock()
        assert await StorageService(bucket).discard_image(IMAGE_URL) is True

    @pytest.mark.asyncio
    async def test_failure_is_swallowed(self):
        bucket = MagicMock()
        bucket.blob.return_value.delete.side_effect = NotFound("No such object")

        assert await StorageService(bucket).discard_image(IMAGE_URL) is False

    @pytest.mark.asyncio
    async def test_unexpected_error_is_swallowed(self):
        bucket = MagicMock()
        bucket.blob.return_value.delete.side_effect = ConnectionError("network down")

        assert await StorageService(bucket).discard_image(IMAGE_URL) is False


class TestFromConfig:
    def test_without_bucket_name(self, caplog):
        with patch("catalog.services.storage_service.Config") as mock_config, \
             patch("catalog.services.storage_service.storage") as mock_storage:
            mock_config.STORAGE_BUCKET = ""
            mock_config.FIREBASE_CREDENTIALS = "missing.json"

            with caplog.at_level(logging.WARNING):
                service = StorageService.from_config()

        assert service.bucket is None
        assert "Storage bucket not configured" in caplog.text
        mock_storage.Client.from_service_account_json.assert_not_called()

    def test_without_credentials_file(self, tmp_path, caplog):
        with patch("catalog.services.storage_service.Config") as mock_config, \
             patch("catalog.services.storage_service.storage") as mock_storage:
            mock_config.STORAGE_BUCKET = "shop.appspot.com"
            mock_config.FIREBASE_CREDENTIALS = str(tmp_path / "absent.json")

            with caplog.at_level(logging.WARNING):
                service = StorageService.from_config()

        assert service.bucket is None
        assert "Storage bucket not configured" in caplog.text
        mock_storage.Client.from_service_account_json.assert_not_called()

    def test_opens_bucket(self, tmp_path):
        credentials = tmp_path / "serviceAccountKey.json"
        credentials.write_text("{}")

        with patch("catalog.services.storage_service.Config") as mock_config, \
             patch("catalog.services.storage_service.storage") as mock_storage:
            mock_config.STORAGE_BUCKET = "gs://shop.appspot.com"
            mock_config.FIREBASE_CREDENTIALS = str(credentials)

            service = StorageService.from_config()

            mock_storage.Client.from_service_account_json.assert_called_once_with(str(credentials))
            client = mock_storage.Client.from_service_account_json.return_value
            client.bucket.assert_called_once_with("shop.appspot.com")
            assert service.bucket is client.bucket.return_value
