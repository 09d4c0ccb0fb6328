"""Messages exchanged with the guest agent: capabilities and clipboard."""

from __future__ import annotations

import logging
import struct
from typing import NamedTuple

from . import messages as m
from .messages import DataType

log = logging.getLogger(__name__)

_UINT32 = struct.Struct("<I")
_SELECTION = struct.Struct("<B3x")
# every capability this client knows fits in a single word
_CAPS_WORDS = 1

_TO_AGENT = {
    DataType.TEXT: m.VD_AGENT_CLIPBOARD_UTF8_TEXT,
    DataType.PNG: m.VD_AGENT_CLIPBOARD_IMAGE_PNG,
    DataType.BMP: m.VD_AGENT_CLIPBOARD_IMAGE_BMP,
    DataType.TIFF: m.VD_AGENT_CLIPBOARD_IMAGE_TIFF,
    DataType.JPEG: m.VD_AGENT_CLIPBOARD_IMAGE_JPG,
}
_FROM_AGENT = {agent: spice for spice, agent in _TO_AGENT.items()}


class AgentError(Exception):
    """Raised for malformed or out-of-order agent traffic."""


class AgentCaps(NamedTuple):
    """What the agent announced about itself."""

    request: bool
    clipboard_supported: bool
    clipboard_selection: bool


def spice_to_agent_type(data_type: DataType) -> int:
    """Map a clipboard data type to the agent's type code."""
    try:
        return _TO_AGENT[DataType(data_type)]
    except (KeyError, ValueError):
        log.error("unsupported spice data type specified")
        return m.VD_AGENT_CLIPBOARD_NONE


def agent_to_spice_type(agent_type: int) -> DataType:
    """Map an agent type code to a clipboard data type."""
    try:
        return _FROM_AGENT[agent_type]
    except KeyError:
        log.error("unsupported agent data type specified")
        return DataType.NONE


def pack_agent_caps(request: bool) -> bytes:
    """Build the announce-capabilities payload this client sends."""
    caps = [0] * _CAPS_WORDS
    m.set_capability(caps, m.VD_AGENT_CAP_CLIPBOARD_BY_DEMAND)
    m.set_capability(caps, m.VD_AGENT_CAP_CLIPBOARD_SELECTION)
    return _UINT32.pack(1 if request else 0) + struct.pack(f"<{len(caps)}I", *caps)


def parse_agent_caps(payload: bytes) -> AgentCaps:
    """Read an announce-capabilities payload received from the agent."""
    if len(payload) < _UINT32.size:
        raise AgentError("capabilities message too short")
    (request,) = _UINT32.unpack_from(payload)
    count = (len(payload) - _UINT32.size) // 4
    caps = struct.unpack_from(f"<{count}I", payload, _UINT32.size)
    selection = m.has_capability(caps, m.VD_AGENT_CAP_CLIPBOARD_SELECTION)
    supported = selection or m.has_capability(caps, m.VD_AGENT_CAP_CLIPBOARD_BY_DEMAND)
    return AgentCaps(bool(request), supported, selection)


def _selection_prefix(selection: bool) -> bytes:
    return _SELECTION.pack(m.VD_AGENT_CLIPBOARD_SELECTION_CLIPBOARD) if selection else b""


def build_clipboard_grab(data_type: DataType, selection: bool) -> bytes:
    """Payload announcing that the client owns the clipboard."""
    if data_type == DataType.NONE:
        raise AgentError("grab type is invalid")
    return _selection_prefix(selection) + _UINT32.pack(spice_to_agent_type(data_type))


def build_clipboard_release(selection: bool) -> bytes:
    """Payload giving up the client's clipboard ownership."""
    return _selection_prefix(selection)


def build_clipboard_data(data_type: DataType, data: bytes, selection: bool) -> bytes:
    """Payload carrying clipboard contents to the agent."""
    return (_selection_prefix(selection)
            + _UINT32.pack(spice_to_agent_type(data_type)) + bytes(data))


def build_clipboard_request(data_type: DataType) -> bytes:
    """Payload asking the agent for its clipboard contents."""
    return _UINT32.pack(spice_to_agent_type(data_type))


def split_agent_payload(size: int) -> list[int]:
    """Chunk sizes for sending ``size`` payload bytes to the agent.

    The first chunk shares its message with the agent header; every later
    chunk travels in a message of its own.
    """
    chunks = []
    limit = m.VD_AGENT_MAX_DATA_SIZE - m.AgentMessage.SIZE
    while size > 0:
        chunk = min(size, limit)
        chunks.append(chunk)
        size -= chunk
        limit = m.VD_AGENT_MAX_DATA_SIZE
    return chunks


class ClipboardBuffer:
    """Collects clipboard data that the agent sends over several messages."""

    def __init__(self) -> None:
        self._data: bytearray | None = None
        self._remaining = 0

    @property
    def active(self) -> bool:
        return self._data is not None

    @property
    def remaining(self) -> int:
        return self._remaining

    @property
    def size(self) -> int:
        return len(self._data) if self._data is not None else 0

    def start(self, total: int) -> None:
        """Begin a transfer of ``total`` bytes."""
        if self._data is not None:
            raise AgentError("clipboard buffer was never freed")
        if total < 0:
            raise AgentError("negative clipboard size")
        self._data = bytearray()
        self._remaining = total

    def feed(self, data: bytes) -> bool:
        """Append received bytes; True once the transfer is complete."""
        if self._data is None:
            raise AgentError("no clipboard transfer in progress")
        if len(data) > self._remaining:
            raise AgentError("more clipboard data than announced")
        self._data += data
        self._remaining -= len(data)
        return self._remaining == 0

    def take(self) -> bytes:
        """Return the completed data and clear the buffer."""
        if self._data is None or self._remaining:
            raise AgentError("clipboard transfer is incomplete")
        data = bytes(self._data)
        self.reset()
        return data

    def reset(self) -> None:
        self._data = None
        self._remaining = 0