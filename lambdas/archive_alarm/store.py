# lambdas/archive_alarm/store.py
from typing import Protocol


class ObjectStore(Protocol):
    """Anything the archiver can write a single object to."""

    def put_object(self, key: str, body: str, content_type: str) -> dict:
        ...


class S3ObjectStore:
    """
    Writes archived alarms to a single S3 bucket.
    """

    def __init__(self, client, bucket: str):
        self.client = client
        self.bucket = bucket

    def put_object(self, key: str, body: str, content_type: str) -> dict:
        """
        Uploads the body under the given key.

        Args:
            key: The object key inside the bucket.
            body: The text content, stored as UTF-8.
            content_type: The Content-Type recorded on the object.

        Returns:
            The raw put_object response from S3.

        Raises:
            ClientError: If the boto3 call to S3 fails.
        """
        return self.client.put_object(
            Bucket=self.bucket,
            Key=key,
            Body=body.encode('utf-8'),
            ContentType=content_type,
        )
