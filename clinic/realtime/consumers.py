import json

from channels.generic.websocket import AsyncWebsocketConsumer
from django.conf import settings


class BedUpdatesConsumer(AsyncWebsocketConsumer):
    """Read-only feed of bed and patient events for the dashboards."""

    async def connect(self):
        self.group = settings.BED_EVENTS_GROUP
        await self.channel_layer.group_add(self.group, self.channel_name)
        await self.accept()
        await self.send(json.dumps({"type": "welcome", "message": "connected"}))

    async def disconnect(self, close_code):
        await self.channel_layer.group_discard(self.group, self.channel_name)

    async def beds_event(self, event):
        # event: {"type": "beds.event", "event": "bed-occupied", "ts": "...", "data": {...}}
        await self.send(json.dumps({"type": event["event"], "ts": event["ts"], "data": event["data"]}))
