from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from homepa.models.event import Event

# Minutes to arrive ahead of an event, by importance
ARRIVAL_BUFFER_MINUTES: Dict[str, int] = {
    "critical": 30,
    "high": 20,
    "medium": 10,
    "low": 5,
}

TIME_FORMAT = "%H:%M"


class TravelService:
    """Arrival/departure estimates for events with a place and a start time.

    There is no routing: travel time is a single configured assumption.
    """

    @staticmethod
    def arrival_time(start_time: str, importance: str) -> datetime:
        start = datetime.strptime(start_time, TIME_FORMAT)
        buffer = ARRIVAL_BUFFER_MINUTES.get(importance, ARRIVAL_BUFFER_MINUTES["medium"])
        return start - timedelta(minutes=buffer)

    @staticmethod
    def suggest_for_event(event: Event, travel_minutes: int) -> Optional[Dict[str, Any]]:
        if not event.location or not event.start_time:
            return None

        arrival = TravelService.arrival_time(event.start_time, event.importance)
        departure = arrival - timedelta(minutes=travel_minutes)
        # strftime wraps anything before midnight back into the same day
        return {
            "event_id": event.id,
            "title": event.title,
            "location": event.location,
            "start_time": event.start_time,
            "importance": event.importance,
            "arrival_time": arrival.strftime(TIME_FORMAT),
            "departure_time": departure.strftime(TIME_FORMAT),
            "duration_minutes": travel_minutes,
        }

    @staticmethod
    def suggest_for_events(events: List[Event], travel_minutes: int) -> List[Dict[str, Any]]:
        suggestions = []
        for event in sorted(events, key=lambda e: e.start_time or ""):
            suggestion = TravelService.suggest_for_event(event, travel_minutes)
            if suggestion is not None:
                suggestions.append(suggestion)
        return suggestions


travel_service = TravelService()
