# tests/test_store.py
from unittest.mock import MagicMock

import boto3
import pytest
from botocore.exceptions import ClientError
from botocore.stub import ANY, Stubber

from store import S3ObjectStore


@pytest.fixture
def s3_client():
    return boto3.client(
        's3',
        region_name='us-east-1',
        aws_access_key_id='testing',
        aws_secret_access_key='testing',
    )

def test_put_object_calls_s3(s3_client):
    store = S3ObjectStore(s3_client, "alarm-archive")

    with Stubber(s3_client) as stubber:
        stubber.add_response(
            'put_object',
            {"ETag": '"etag-1"'},
            {
                "Bucket": "alarm-archive",
                "Key": "i-i-0123/alarm-2025-12-01_22-02-27.json",
                "Body": ANY,
                "ContentType": "application/json",
            },
        )
        response = store.put_object(
            "i-i-0123/alarm-2025-12-01_22-02-27.json",
            '{"AlarmName": "HighCPU"}',
            "application/json",
        )
        stubber.assert_no_pending_responses()

    assert response["ETag"] == '"etag-1"'

def test_put_object_propagates_client_error(s3_client):
    store = S3ObjectStore(s3_client, "alarm-archive")

    with Stubber(s3_client) as stubber:
        stubber.add_client_error('put_object', service_error_code='NoSuchBucket', http_status_code=404)
        with pytest.raises(ClientError) as exc_info:
            store.put_object("k.json", "{}", "application/json")

    assert exc_info.value.response["Error"]["Code"] == "NoSuchBucket"

def test_put_object_encodes_body_as_utf8():
    client = MagicMock()
    store = S3ObjectStore(client, "alarm-archive")

    store.put_object("i-x/alarm.json", '{"AlarmName": "CPU 告警"}', "application/json")

    client.put_object.assert_called_once_with(
        Bucket="alarm-archive",
        Key="i-x/alarm.json",
        Body='{"AlarmName": "CPU 告警"}'.encode('utf-8'),
        ContentType="application/json",
    )
