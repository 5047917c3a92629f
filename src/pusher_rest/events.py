"""
Trigger event payload

The trigger endpoint takes a JSON envelope with lowercase-underscore field
names. The caller's data is serialized separately and travels as a string in
the ``data`` field.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from .exceptions import InvalidArgument
from .validation import require_max_length, require_no_empty_members, require_non_empty

MAX_CHANNELS_PER_TRIGGER = 10

Serializer = Callable[[Any], str]


def default_serializer(value: Any) -> str:
    """Serialize caller data as compact JSON."""
    return json.dumps(value, separators=(',', ':'), ensure_ascii=False)


def normalize_channels(channels: Union[str, Sequence[str]]) -> List[str]:
    """
    Turn a single channel name or a sequence of names into a list.

    Raises:
        InvalidArgument: If channels is None or not a string or sequence
    """
    require_non_empty("channels", channels)

    if isinstance(channels, str):
        return [channels]

    if not isinstance(channels, (list, tuple)):
        raise InvalidArgument(
            f"channels must be a string or a list of strings, got {type(channels).__name__}",
            {"argument": "channels"}
        )

    return list(channels)


@dataclass(frozen=True)
class TriggerPayload:
    """
    Body of a trigger request

    Attributes:
        channels: Channels to publish to, 1 to 10 non-empty names
        name: Event name
        data: Caller payload, already serialized
        socket_id: Optional socket to exclude from receiving the event
    """
    channels: List[str]
    name: str
    data: str
    socket_id: Optional[str] = field(default=None)

    def __post_init__(self):
        """Validate payload after initialization"""
        require_non_empty("channels", self.channels)
        require_max_length("channels", MAX_CHANNELS_PER_TRIGGER, self.channels)
        require_no_empty_members("channels", self.channels)
        require_non_empty("name", self.name)

        if not isinstance(self.data, str):
            raise InvalidArgument("data must be a serialized string", {"argument": "data"})

        if self.socket_id is not None and (not isinstance(self.socket_id, str) or not self.socket_id):
            raise InvalidArgument("socket_id cannot be empty", {"argument": "socket_id"})

    def to_dict(self) -> Dict[str, Any]:
        payload = {
            'channels': list(self.channels),
            'name': self.name,
            'data': self.data,
        }
        if self.socket_id is not None:
            payload['socket_id'] = self.socket_id
        return payload

    def to_json(self) -> str:
        """Serialize the envelope exactly as it is transmitted."""
        return json.dumps(self.to_dict(), separators=(',', ':'), ensure_ascii=False)
