"""
Best-effort real-time events for the bed board.

Events are pushed to the channel layer group configured by
``BED_EVENTS_GROUP`` once the surrounding transaction commits, so a
rolled back workflow never announces anything.  Delivery failures are
logged and dropped.
"""
import logging
from typing import Any, Dict

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.conf import settings
from django.db import transaction
from django.utils import timezone

logger = logging.getLogger(__name__)

BED_STATUS_CHANGED = 'bed-status-changed'
BED_OCCUPIED = 'bed-occupied'
BED_RELEASED = 'bed-released'
PATIENT_ADMITTED = 'patient-admitted'
PATIENT_DISCHARGED = 'patient-discharged'
WARDS_REFRESHED = 'wards-refreshed'


def send_event(event: str, data: Dict[str, Any]) -> bool:
    """Push one event now.  Returns False when it could not be delivered."""
    try:
        channel_layer = get_channel_layer()
        if channel_layer is None:
            return False
        payload = {
            'type': 'beds.event',
            'event': event,
            'ts': timezone.now().isoformat(),
            'data': data,
        }
        async_to_sync(channel_layer.group_send)(settings.BED_EVENTS_GROUP, payload)
    except Exception:
        logger.warning('could not publish %s event', event, exc_info=True)
        return False
    return True


def publish(event: str, data: Dict[str, Any]) -> None:
    """Queue ``event`` for delivery after the current transaction commits."""
    transaction.on_commit(lambda: send_event(event, data))


def bed_payload(bed) -> Dict[str, Any]:
    return {
        'bedId': bed.id,
        'bedNumber': bed.bed_number,
        'ward': bed.ward,
        'status': bed.status,
        'occupiedBy': bed.occupied_by_id,
    }
