# cli/publish_alarm.py
import os
import json
import argparse
from datetime import datetime, timezone

import boto3
from botocore.exceptions import ClientError
from dotenv import load_dotenv

# Load environment variables from a .env file for local testing
load_dotenv()

# The SNS topic the CloudWatch alarm notifies
TOPIC_ARN = os.environ.get("ALARM_TOPIC_ARN")
AWS_REGION = os.environ.get("AWS_REGION", "us-east-1")


def create_alarm_message(instance_id: str, alarm_name: str = "HighCPUUtilization",
                         new_state: str = "ALARM", threshold: float = 70.0) -> dict:
    """
    Builds a CloudWatch alarm notification shaped like the ones SNS delivers
    for an EC2 CPUUtilization alarm.
    """
    return {
        "AlarmName": alarm_name,
        "AlarmDescription": f"CPU above {threshold}% on {instance_id}",
        "NewStateValue": new_state,
        "NewStateReason": f"Threshold Crossed: 1 datapoint was greater than the threshold ({threshold}).",
        "OldStateValue": "OK" if new_state == "ALARM" else "ALARM",
        "StateChangeTime": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
        "Region": AWS_REGION,
        "Trigger": {
            "MetricName": "CPUUtilization",
            "Namespace": "AWS/EC2",
            "StatisticType": "Statistic",
            "Statistic": "AVERAGE",
            "Dimensions": [{"name": "InstanceId", "value": instance_id}],
            "Period": 300,
            "EvaluationPeriods": 1,
            "ComparisonOperator": "GreaterThanThreshold",
            "Threshold": threshold,
        },
    }

def publish_alarm(sns_client, topic_arn: str, message: dict) -> str | None:
    """
    Publishes the alarm message to the topic. Returns the SNS MessageId.
    """
    if not topic_arn:
        print("❌ ERROR: ALARM_TOPIC_ARN environment variable not set. Please create a .env file.")
        return None

    print("--- Attempting to publish alarm ---")
    print(json.dumps(message, indent=2))
    print("-----------------------------------")

    try:
        response = sns_client.publish(
            TopicArn=topic_arn,
            Message=json.dumps(message),
            Subject=f'{message["NewStateValue"]}: "{message["AlarmName"]}"',
        )
    except ClientError as e:
        print(f"\n❌ Failed to publish alarm.")
        print(f"Error: {e.response['Error']['Message']}")
        return None

    message_id = response.get("MessageId")
    print(f"\n✅ Success! Alarm published. MessageId: {message_id}")
    return message_id


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Publish a sample CloudWatch alarm to the archive topic.")
    parser.add_argument("--instance-id", default="0123456789abcdef0")
    parser.add_argument("--alarm-name", default="HighCPUUtilization")
    parser.add_argument("--state", default="ALARM", choices=["ALARM", "OK", "INSUFFICIENT_DATA"])
    args = parser.parse_args()

    print("--- Alarm Archiver Test CLI ---")
    alarm = create_alarm_message(args.instance_id, args.alarm_name, args.state)
    publish_alarm(boto3.client("sns", region_name=AWS_REGION), TOPIC_ARN, alarm)
