# alarm-archiver/run_live.py
import os
import sys
import json
import boto3
from botocore.exceptions import ClientError
from dotenv import load_dotenv

# Load ARCHIVE_BUCKET and friends from .env before the handler module reads them
load_dotenv()
sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "lambdas", "archive_alarm"))
sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "cli"))

from models import get_settings
from publish_alarm import create_alarm_message


def setup_archive_bucket(s3, bucket: str, region: str):
    """Checks for and creates the archive bucket if it doesn't exist."""
    try:
        s3.head_bucket(Bucket=bucket)
        print(f"S3 bucket '{bucket}' already exists.")
    except ClientError as e:
        if e.response['Error']['Code'] in ('404', 'NoSuchBucket'):
            print(f"S3 bucket '{bucket}' not found. Creating it now...")
            if region == 'us-east-1':
                s3.create_bucket(Bucket=bucket)
            else:
                s3.create_bucket(Bucket=bucket, CreateBucketConfiguration={'LocationConstraint': region})
            s3.get_waiter('bucket_exists').wait(Bucket=bucket)
            print(f"Bucket '{bucket}' created successfully.")
        else: raise e

def run_live(instance_id: str = "0123456789abcdef0"):
    """Executes the archive_alarm Lambda handler using your live AWS credentials."""
    print("--- Starting LIVE Run of archive_alarm Lambda ---")
    settings = get_settings()
    if not settings.archive_bucket:
        print("❌ ERROR: ARCHIVE_BUCKET environment variable not set. Please create a .env file.")
        return

    s3 = boto3.client('s3', region_name=settings.aws_region)
    try:
        setup_archive_bucket(s3, settings.archive_bucket, settings.aws_region)
    except Exception as e:
        print(f"Could not complete setup. Aborting run. Error: {e}")
        return

    # The handler expects an SNS event; build one around a sample alarm.
    sns_event = {
        "Records": [{
            "EventSource": "aws:sns",
            "Sns": {
                "Type": "Notification",
                "Subject": "ALARM: \"HighCPUUtilization\"",
                "Message": json.dumps(create_alarm_message(instance_id)),
            }
        }]
    }

    from app import handler

    try:
        print("\n--- Invoking Lambda handler (this will write to S3) ---")
        result = handler(sns_event, {})
        print("--- Lambda handler execution finished ---")
        print(json.dumps(result, indent=2))
    except Exception as e:
        print(f"\n An unexpected error occurred during the run: {e}")
        return

    key = result['body'].removeprefix("Saved alarm to ")
    head = s3.head_object(Bucket=settings.archive_bucket, Key=key)
    print(f"\n Success! s3://{settings.archive_bucket}/{key} "
          f"({head['ContentLength']} bytes, {head['ContentType']})")


if __name__ == "__main__":
    run_live()
