import asyncio
from pathlib import Path
from typing import Optional

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from src.app.services.blob_store import BlobStore, StorageError


class S3BlobStore(BlobStore):
    """S3-compatible object storage"""

    def __init__(
        self,
        bucket: str,
        region: str,
        endpoint_url: Optional[str] = None,
        access_key_id: Optional[str] = None,
        secret_access_key: Optional[str] = None,
    ):
        self._bucket_name = bucket
        self._region = region
        self._endpoint_url = endpoint_url
        self._access_key_id = access_key_id or None
        self._secret_access_key = secret_access_key or None
        self._client = None

    @property
    def client(self):
        """Lazy initialization of the S3 client."""
        if self._client is None:
            if not self._bucket_name:
                raise StorageError("S3 bucket is not configured")
            self._client = boto3.client(
                "s3",
                endpoint_url=self._endpoint_url,
                aws_access_key_id=self._access_key_id,
                aws_secret_access_key=self._secret_access_key,
                region_name=self._region,
                config=Config(signature_version="s3v4"),
            )
        return self._client

    async def upload(self, key: str, content: bytes, content_type: str) -> None:
        try:
            await asyncio.to_thread(
                self.client.put_object,
                Bucket=self._bucket_name,
                Key=key,
                Body=content,
                ContentType=content_type,
                ServerSideEncryption="AES256",
            )
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Failed to upload {key} to S3: {e}") from e

    async def download(self, key: str) -> bytes:
        try:
            response = await asyncio.to_thread(
                self.client.get_object, Bucket=self._bucket_name, Key=key
            )
            return await asyncio.to_thread(response["Body"].read)
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Failed to download {key} from S3: {e}") from e

    async def delete(self, key: str) -> None:
        try:
            await asyncio.to_thread(
                self.client.delete_object, Bucket=self._bucket_name, Key=key
            )
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Failed to delete {key} from S3: {e}") from e


class LocalBlobStore(BlobStore):
    """Filesystem storage rooted at a directory"""

    def __init__(self, root: str):
        self.root = Path(root).resolve()

    def _path(self, key: str) -> Path:
        path = (self.root / key).resolve()
        if self.root not in path.parents:
            raise StorageError(f"Storage key escapes the storage root: {key}")
        return path

    async def upload(self, key: str, content: bytes, content_type: str) -> None:
        path = self._path(key)
        try:
            await asyncio.to_thread(path.parent.mkdir, parents=True, exist_ok=True)
            await asyncio.to_thread(path.write_bytes, content)
        except OSError as e:
            raise StorageError(f"Failed to write {key}: {e}") from e

    async def download(self, key: str) -> bytes:
        try:
            return await asyncio.to_thread(self._path(key).read_bytes)
        except OSError as e:
            raise StorageError(f"Failed to read {key}: {e}") from e

    async def delete(self, key: str) -> None:
        path = self._path(key)
        try:
            await asyncio.to_thread(path.unlink, missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to delete {key}: {e}") from e
