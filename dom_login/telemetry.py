"""
Silent in-memory diagnostics.

Events are kept in a bounded FIFO buffer and never printed, so a running
flow leaves no visible trace on the page or the console. Callers read the
buffer back with ``get_events()`` to diagnose failures.
"""

import copy
import logging
import traceback
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

logger = logging.getLogger(__name__)

EVENT_KINDS = ('attempt', 'success', 'warning', 'error')
DEFAULT_CAPACITY = 50


@dataclass(frozen=True)
class TelemetryEvent:
    timestamp: str
    kind: str
    message: str
    data: Mapping[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'timestamp': self.timestamp,
            'kind': self.kind,
            'message': self.message,
            'data': dict(self.data),
        }


class TelemetryLog:
    """Append-only ring buffer of diagnostic events"""

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError("Telemetry capacity must be at least 1")
        self._events = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._events.maxlen

    def __len__(self) -> int:
        return len(self._events)

    def log(self, kind: str, message: str, data: Optional[Dict[str, Any]] = None) -> TelemetryEvent:
        if kind not in EVENT_KINDS:
            raise ValueError(f"Unknown telemetry kind: {kind}")

        event = TelemetryEvent(
            timestamp=datetime.now(timezone.utc).isoformat(),
            kind=kind,
            message=message,
            data=MappingProxyType(copy.deepcopy(dict(data or {}))),
        )
        self._events.append(event)
        logger.debug(f"[{kind}] {message}")
        return event

    def attempt(self, message: str, data: Optional[Dict[str, Any]] = None) -> TelemetryEvent:
        return self.log('attempt', message, data)

    def success(self, message: str, data: Optional[Dict[str, Any]] = None) -> TelemetryEvent:
        return self.log('success', message, data)

    def warning(self, message: str, data: Optional[Dict[str, Any]] = None) -> TelemetryEvent:
        return self.log('warning', message, data)

    def failure(self, message: str, error: Any = None) -> TelemetryEvent:
        """Record an error, normalizing whatever was caught"""
        stack = None
        if isinstance(error, BaseException):
            text = str(error) or error.__class__.__name__
            if error.__traceback__ is not None:
                stack = ''.join(traceback.format_exception(type(error), error, error.__traceback__))
        else:
            text = str(error)
        return self.log('error', message, {'error': text, 'stack': stack})

    def get_events(self) -> List[TelemetryEvent]:
        return list(self._events)

    def clear(self):
        self._events.clear()


# Shared by convention when a host wants a single page-wide log
default_telemetry = TelemetryLog()
