from urllib.parse import quote, unquote, urlparse

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from docfiler.config.settings import Settings
from docfiler.logging.logger import Log
from docfiler.storage.base import BaseObjectStore
from docfiler.storage.exceptions import (
    InvalidReferenceError,
    ObjectStoreError,
    RetrievalError,
)
from docfiler.storage.models import PresignedUpload, StoredObject

_MISSING_OBJECT_CODES = frozenset({"NoSuchKey", "NoSuchBucket", "404"})


def parse_reference(reference: str) -> tuple[str, str]:
    """Split an object reference into (bucket, key).

    Accepts virtual-hosted S3 URLs (https://<bucket>.s3.<region>.amazonaws.com/<key>)
    and s3://<bucket>/<key>. The key is URL-decoded.

    Raises:
        InvalidReferenceError: if no bucket or key can be extracted.
    """
    parsed = urlparse(reference)
    if parsed.scheme == "s3":
        bucket = parsed.netloc
    elif parsed.scheme in ("http", "https") and parsed.hostname:
        bucket = parsed.hostname.split(".")[0]
    else:
        raise InvalidReferenceError(f"Unsupported object reference: {reference!r}")

    key = unquote(parsed.path.lstrip("/"))
    if not bucket or not key:
        raise InvalidReferenceError(f"Object reference has no bucket or key: {reference!r}")
    return bucket, key


class S3ObjectStore(BaseObjectStore):
    """Object store adapter backed by AWS S3 (or an S3-compatible endpoint)."""

    def __init__(
        self,
        *,
        bucket_name: str,
        region_name: str,
        timeout_seconds: int,
        presign_expires_seconds: int = 3600,
        aws_access_key_id: str | None = None,
        aws_secret_access_key: str | None = None,
        endpoint_url: str | None = None,
    ) -> None:
        self._bucket_name = bucket_name
        self._region_name = region_name
        self._presign_expires_seconds = presign_expires_seconds
        config = Config(
            signature_version="s3v4",
            connect_timeout=timeout_seconds,
            read_timeout=timeout_seconds,
            retries={"max_attempts": 3},
        )
        self._client = boto3.client(
            "s3",
            aws_access_key_id=aws_access_key_id or None,
            aws_secret_access_key=aws_secret_access_key or None,
            region_name=region_name,
            endpoint_url=endpoint_url,
            config=config,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "S3ObjectStore":
        return cls(
            bucket_name=settings.aws_s3_bucket_name,
            region_name=settings.aws_region,
            timeout_seconds=settings.object_store_timeout_seconds,
            presign_expires_seconds=settings.presign_expires_seconds,
            aws_access_key_id=settings.aws_access_key_id,
            aws_secret_access_key=settings.aws_secret_access_key,
            endpoint_url=settings.aws_s3_endpoint_url,
        )

    def get(self, reference: str) -> StoredObject:
        bucket, key = parse_reference(reference)
        try:
            response = self._client.get_object(Bucket=bucket, Key=key)
            data = response["Body"].read()
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code", "")
            if code in _MISSING_OBJECT_CODES:
                raise RetrievalError(f"Object not found: s3://{bucket}/{key}") from exc
            raise RetrievalError(f"Failed to fetch s3://{bucket}/{key}: {exc}") from exc
        except BotoCoreError as exc:
            raise RetrievalError(f"Object store unreachable: {exc}") from exc

        Log.debug(f"Fetched {len(data)} bytes from s3://{bucket}/{key}")
        return StoredObject(
            file_name=key,
            data=data,
            content_type=response.get("ContentType"),
            content_length=response.get("ContentLength"),
        )

    def put(self, path: str, data: bytes, content_type: str) -> str:
        try:
            self._client.put_object(
                Bucket=self._bucket_name,
                Key=path,
                Body=data,
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as exc:
            raise ObjectStoreError(f"Failed to store {path}: {exc}") from exc
        return self._object_url(path)

    def presign(self, path: str, content_type: str) -> PresignedUpload:
        try:
            url = self._client.generate_presigned_url(
                "put_object",
                Params={
                    "Bucket": self._bucket_name,
                    "Key": path,
                    "ContentType": content_type,
                },
                ExpiresIn=self._presign_expires_seconds,
            )
        except (ClientError, BotoCoreError) as exc:
            raise ObjectStoreError(f"Failed to presign {path}: {exc}") from exc
        return PresignedUpload(url=url, key=path)

    def _object_url(self, path: str) -> str:
        return (
            f"https://{self._bucket_name}.s3.{self._region_name}.amazonaws.com/"
            f"{quote(path, safe='/')}"
        )
