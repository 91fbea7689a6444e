# lambdas/archive_alarm/models.py
"""
Plain-dataclass models and a simple settings class for the alarm archiver.
"""
import os
import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


class AlarmArchiveError(Exception):
    """Raised when an alarm notification could not be archived."""
    pass

class InvalidNotificationError(AlarmArchiveError, ValueError):
    """The incoming SNS event or its inner message could not be parsed."""
    pass


class AppSettings:
    """
    Loads configuration settings directly from environment variables,
    providing sensible defaults for local testing.
    """
    def __init__(self):
        self.aws_region: str = os.getenv("AWS_REGION", "us-east-1")
        self.archive_bucket: Optional[str] = os.getenv("ARCHIVE_BUCKET")
        self.key_prefix: str = os.getenv("KEY_PREFIX", "i-")
        self.unknown_resource_id: str = os.getenv("UNKNOWN_RESOURCE_ID", "unknown")


def get_settings() -> AppSettings:
    """Re-reads the environment; handy for tests and local runs."""
    return AppSettings()


# Data models
@dataclass
class AlarmNotification:
    """
    The inner message of an SNS record, as published by CloudWatch.
    """
    message: Dict[str, Any]

    @classmethod
    def from_sns_event(cls, event: dict) -> "AlarmNotification":
        """
        Parses the first record's SNS message into a notification.

        Raises:
            InvalidNotificationError: If the record is missing, the message is
                not valid JSON, or it does not decode to a JSON object.
        """
        try:
            message_string = event['Records'][0]['Sns']['Message']
            message = json.loads(message_string)
        except (KeyError, IndexError, TypeError, json.JSONDecodeError) as e:
            raise InvalidNotificationError(f"Could not parse the incoming SNS event: {e}") from e

        if not isinstance(message, dict):
            raise InvalidNotificationError(
                f"SNS message must be a JSON object, got {type(message).__name__}."
            )
        return cls(message=message)

    def resource_id(self, fallback: str = "unknown") -> str:
        """
        Returns Trigger.Dimensions[0].value, or the fallback when any level
        of that path is missing, empty or not a string or number. Numbers are
        converted with str().
        """
        trigger = self.message.get("Trigger")
        if not isinstance(trigger, dict):
            return fallback

        dimensions = trigger.get("Dimensions")
        if not isinstance(dimensions, list) or not dimensions:
            return fallback

        first = dimensions[0]
        value = first.get("value") if isinstance(first, dict) else None
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            return fallback
        return str(value) or fallback

    @property
    def alarm_name(self) -> Optional[str]:
        return self.message.get("AlarmName")

    @property
    def new_state(self) -> Optional[str]:
        return self.message.get("NewStateValue")


@dataclass
class ArchivedObject:
    """
    An object written to the archive bucket. Created once, never updated.
    """
    key: str
    body: str
    content_type: str = field(default="application/json")
