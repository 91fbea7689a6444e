# lambdas/archive_alarm/archiver.py
import json
from datetime import datetime
from typing import Callable, Optional

from models import (
    AlarmArchiveError,
    AlarmNotification,
    AppSettings,
    ArchivedObject,
)
from store import ObjectStore

TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"
JSON_CONTENT_TYPE = "application/json"


def format_timestamp(moment: datetime) -> str:
    return moment.strftime(TIMESTAMP_FORMAT)

def build_object_key(resource_id: str, moment: datetime, prefix: str = "i-") -> str:
    """Builds '{prefix}{resource_id}/alarm-{YYYY-MM-DD_HH-MM-SS}.json'."""
    return f"{prefix}{resource_id}/alarm-{format_timestamp(moment)}.json"

def serialize_message(message: dict) -> str:
    return json.dumps(message, indent=2, ensure_ascii=False)


def archive_alarm(
    event: dict,
    store: ObjectStore,
    now: Optional[Callable[[], datetime]] = None,
    log: Optional[Callable[[str], None]] = None,
    settings: Optional[AppSettings] = None,
) -> ArchivedObject:
    """
    Parses the alarm notification in an SNS event and writes it to the store.

    Only the first record of the event is archived. Two invocations for the
    same resource within the same second produce the same key, and the later
    write wins.

    Args:
        event: The SNS event delivered to the Lambda function.
        store: Destination exposing put_object(key, body, content_type).
        now: Clock used for the key timestamp. Defaults to local datetime.now.
        log: Diagnostics sink, one string per call. Defaults to print.
        settings: Key prefix and fallback resource id; read from the
            environment when omitted.

    Returns:
        The ArchivedObject that was written.

    Raises:
        AlarmArchiveError: If parsing or the store write fails. The original
            exception is kept as __cause__.
    """
    now = now or datetime.now
    log = log or print
    settings = settings or AppSettings()

    try:
        notification = AlarmNotification.from_sns_event(event)

        resource_id = notification.resource_id(fallback=settings.unknown_resource_id)
        key = build_object_key(resource_id, now(), prefix=settings.key_prefix)
        archived = ArchivedObject(
            key=key,
            body=serialize_message(notification.message),
            content_type=JSON_CONTENT_TYPE,
        )

        response = store.put_object(archived.key, archived.body, archived.content_type)
    except Exception as e:
        log(f"❌ Error archiving alarm: {e}")
        if isinstance(e, AlarmArchiveError):
            raise
        raise AlarmArchiveError(f"Failed to archive alarm: {e}") from e

    extra_records = len(event['Records']) - 1
    if extra_records > 0:
        log(f"⚠️ Warning: Event carries {extra_records} more record(s). Only the first one is archived.")

    etag = response.get("ETag") if isinstance(response, dict) else None
    log(
        f"✅ Saved alarm '{notification.alarm_name}' ({notification.new_state}) "
        f"to {archived.key}. ETag: {etag}"
    )
    return archived
