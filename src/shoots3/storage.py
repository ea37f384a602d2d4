"""
S3 access behind a narrow interface.

The CLI only needs two remote operations, a metadata lookup and a single
upload, so everything it touches goes through `ObjectStore`. `S3Store` is the
boto3-backed implementation; tests substitute an in-memory one.
"""

import logging
from typing import BinaryIO, Optional, Protocol

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)


class StorageConfigError(Exception):
    """Raised when an S3 client cannot be created from the local configuration."""


class ObjectStore(Protocol):
    def exists(self, bucket: str, key: str) -> bool: ...

    def put(self, bucket: str, key: str, body: BinaryIO, content_type: str) -> None: ...


def make_s3_client(
    region: Optional[str],
    profile: Optional[str] = None,
    endpoint_url: Optional[str] = None,
    use_path_style: bool = False,
):
    session_kwargs = {}
    if profile:
        session_kwargs["profile_name"] = profile
    session = boto3.session.Session(**session_kwargs)
    boto_cfg = BotoConfig(s3={"addressing_style": "path" if use_path_style else "virtual"})
    client_kwargs = {"region_name": region, "config": boto_cfg, "endpoint_url": endpoint_url}
    return session.client("s3", **{k: v for k, v in client_kwargs.items() if v is not None})


class S3Store:
    def __init__(self, client) -> None:
        self._client = client

    def exists(self, bucket: str, key: str) -> bool:
        """Return True only when a HEAD request for the key succeeds.

        Any failure, including 404 and access errors, reads as "absent".
        """
        try:
            self._client.head_object(Bucket=bucket, Key=key)
        except (ClientError, BotoCoreError) as e:
            logger.debug("head_object failed for %s/%s: %s", bucket, key, e)
            return False
        return True

    def put(self, bucket: str, key: str, body: BinaryIO, content_type: str) -> None:
        self._client.put_object(Bucket=bucket, Key=key, Body=body, ContentType=content_type)
        logger.debug("put_object %s/%s (%s)", bucket, key, content_type)


def open_store(
    region: str,
    profile: Optional[str] = None,
    endpoint_url: Optional[str] = None,
    use_path_style: bool = False,
) -> ObjectStore:
    try:
        client = make_s3_client(
            region=region,
            profile=profile,
            endpoint_url=endpoint_url,
            use_path_style=use_path_style,
        )
    except (BotoCoreError, ValueError) as e:
        # ValueError: botocore rejects malformed endpoint URLs with it
        raise StorageConfigError(str(e)) from e
    return S3Store(client)
