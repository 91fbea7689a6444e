# lambdas/archive_alarm/app.py
import boto3

# Import lambda-specific modules
from archiver import archive_alarm
from models import get_settings
from store import S3ObjectStore


# Initialize the S3 client and load configuration in the global scope for reuse.
try:
    SETTINGS = get_settings()
    if not SETTINGS.archive_bucket:
        raise KeyError('ARCHIVE_BUCKET')
    S3_CLIENT = boto3.client('s3', region_name=SETTINGS.aws_region)
    STORE = S3ObjectStore(S3_CLIENT, SETTINGS.archive_bucket)
except KeyError as e:
    # This will cause a Lambda init failure, which is appropriate for missing config.
    print(f"❌ FATAL: Missing required environment variable: {e}")
    raise e


def handler(event, context):
    """
    Triggered by the SNS topic a CloudWatch alarm notifies. Archives the alarm
    message to S3 and reports the object key.

    Any failure is raised so the invocation is marked failed and SNS can apply
    its own retry and dead-letter policy.
    """
    print("--- Archive Alarm Lambda Triggered ---")
    archived = archive_alarm(event, STORE, settings=SETTINGS)

    return {
        "statusCode": 200,
        "body": f"Saved alarm to {archived.key}"
    }
