"""Wire structures and constants of the SPICE protocol and its guest agent."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass
from typing import ClassVar, Sequence

# Link stage
SPICE_MAGIC = int.from_bytes(b"REDQ", "little")
SPICE_VERSION_MAJOR = 2
SPICE_VERSION_MINOR = 2
SPICE_TICKET_PUBKEY_BYTES = 162
SPICE_LINK_ERR_OK = 0

# Channel types
SPICE_CHANNEL_MAIN = 1
SPICE_CHANNEL_DISPLAY = 2
SPICE_CHANNEL_INPUTS = 3

# Common capabilities
SPICE_COMMON_CAP_PROTOCOL_AUTH_SELECTION = 0
SPICE_COMMON_CAP_AUTH_SPICE = 1
SPICE_COMMON_CAP_AUTH_SASL = 2
SPICE_COMMON_CAP_MINI_HEADER = 3

# Main channel capabilities
SPICE_MAIN_CAP_SEMI_SEAMLESS_MIGRATE = 0
SPICE_MAIN_CAP_NAME_AND_UUID = 1
SPICE_MAIN_CAP_AGENT_CONNECTED_TOKENS = 2
SPICE_MAIN_CAP_SEAMLESS_MIGRATE = 3

# Server messages common to all channels
SPICE_MSG_MIGRATE = 1
SPICE_MSG_MIGRATE_DATA = 2
SPICE_MSG_SET_ACK = 3
SPICE_MSG_PING = 4
SPICE_MSG_WAIT_FOR_CHANNELS = 5
SPICE_MSG_DISCONNECTING = 6
SPICE_MSG_NOTIFY = 7

# Client messages common to all channels
SPICE_MSGC_ACK_SYNC = 1
SPICE_MSGC_ACK = 2
SPICE_MSGC_PONG = 3

# Main channel, server side
SPICE_MSG_MAIN_INIT = 103
SPICE_MSG_MAIN_CHANNELS_LIST = 104
SPICE_MSG_MAIN_MOUSE_MODE = 105
SPICE_MSG_MAIN_AGENT_CONNECTED = 107
SPICE_MSG_MAIN_AGENT_DISCONNECTED = 108
SPICE_MSG_MAIN_AGENT_DATA = 109
SPICE_MSG_MAIN_AGENT_TOKEN = 110
SPICE_MSG_MAIN_AGENT_CONNECTED_TOKENS = 115

# Main channel, client side
SPICE_MSGC_MAIN_ATTACH_CHANNELS = 104
SPICE_MSGC_MAIN_MOUSE_MODE_REQUEST = 105
SPICE_MSGC_MAIN_AGENT_START = 106
SPICE_MSGC_MAIN_AGENT_DATA = 107
SPICE_MSGC_MAIN_AGENT_TOKEN = 108

# Inputs channel, server side
SPICE_MSG_INPUTS_INIT = 101
SPICE_MSG_INPUTS_KEY_MODIFIERS = 102
SPICE_MSG_INPUTS_MOUSE_MOTION_ACK = 111

# Inputs channel, client side
SPICE_MSGC_INPUTS_KEY_DOWN = 101
SPICE_MSGC_INPUTS_KEY_UP = 102
SPICE_MSGC_INPUTS_KEY_MODIFIERS = 103
SPICE_MSGC_INPUTS_MOUSE_MOTION = 111
SPICE_MSGC_INPUTS_MOUSE_POSITION = 112
SPICE_MSGC_INPUTS_MOUSE_PRESS = 113
SPICE_MSGC_INPUTS_MOUSE_RELEASE = 114

SPICE_INPUT_MOTION_ACK_BUNCH = 4

# Mouse
SPICE_MOUSE_MODE_SERVER = 1
SPICE_MOUSE_MODE_CLIENT = 2

SPICE_MOUSE_BUTTON_LEFT = 1
SPICE_MOUSE_BUTTON_MIDDLE = 2
SPICE_MOUSE_BUTTON_RIGHT = 3
SPICE_MOUSE_BUTTON_UP = 4
SPICE_MOUSE_BUTTON_DOWN = 5

SPICE_MOUSE_BUTTON_MASK_LEFT = 1 << 0
SPICE_MOUSE_BUTTON_MASK_MIDDLE = 1 << 1
SPICE_MOUSE_BUTTON_MASK_RIGHT = 1 << 2

# Guest agent
VD_AGENT_PROTOCOL = 1
VD_AGENT_MAX_DATA_SIZE = 2048

VD_AGENT_CLIPBOARD = 4
VD_AGENT_ANNOUNCE_CAPABILITIES = 6
VD_AGENT_CLIPBOARD_GRAB = 7
VD_AGENT_CLIPBOARD_REQUEST = 8
VD_AGENT_CLIPBOARD_RELEASE = 9

VD_AGENT_CLIPBOARD_NONE = 0
VD_AGENT_CLIPBOARD_UTF8_TEXT = 1
VD_AGENT_CLIPBOARD_IMAGE_PNG = 2
VD_AGENT_CLIPBOARD_IMAGE_BMP = 3
VD_AGENT_CLIPBOARD_IMAGE_TIFF = 4
VD_AGENT_CLIPBOARD_IMAGE_JPG = 5

VD_AGENT_CAP_CLIPBOARD_BY_DEMAND = 5
VD_AGENT_CAP_CLIPBOARD_SELECTION = 6

VD_AGENT_CLIPBOARD_SELECTION_CLIPBOARD = 0


class DataType(enum.IntEnum):
    """Kinds of clipboard payload exchanged with the guest."""

    TEXT = 0
    PNG = 1
    BMP = 2
    TIFF = 3
    JPEG = 4
    NONE = 5


_MINI_HEADER = struct.Struct("<HI")
_LINK_MESS = struct.Struct("<IBBIII")
_KEY_CODE = struct.Struct("<I")
_MOUSE_MODE = struct.Struct("<H")
_MOUSE_POSITION = struct.Struct("<IIHB")
_MOUSE_MOTION = struct.Struct("<iiH")
_MOUSE_BUTTON = struct.Struct("<BH")
_PING = struct.Struct("<IQ")
_SET_ACK = struct.Struct("<II")
_ACK_SYNC = struct.Struct("<I")
_NOTIFY = struct.Struct("<QIIII")

MINI_HEADER_SIZE = _MINI_HEADER.size
LINK_MESS_SIZE = _LINK_MESS.size
PING_SIZE = _PING.size
SET_ACK_SIZE = _SET_ACK.size
NOTIFY_SIZE = _NOTIFY.size


def _unpack(layout: struct.Struct, data: bytes, what: str) -> tuple:
    if len(data) < layout.size:
        raise ValueError(f"{what} needs {layout.size} bytes, got {len(data)}")
    return layout.unpack_from(data)


@dataclass(frozen=True)
class LinkHeader:
    """The header that opens both directions of the link handshake."""

    magic: int = SPICE_MAGIC
    major_version: int = SPICE_VERSION_MAJOR
    minor_version: int = SPICE_VERSION_MINOR
    size: int = 0

    _STRUCT: ClassVar[struct.Struct] = struct.Struct("<IIII")
    SIZE: ClassVar[int] = _STRUCT.size

    def pack(self) -> bytes:
        return self._STRUCT.pack(self.magic, self.major_version, self.minor_version, self.size)

    @classmethod
    def unpack(cls, data: bytes) -> "LinkHeader":
        return cls(*_unpack(cls._STRUCT, data, "link header"))


@dataclass(frozen=True)
class LinkReply:
    """The server's answer to a link request."""

    error: int
    pub_key: bytes
    num_common_caps: int
    num_channel_caps: int
    caps_offset: int

    _STRUCT: ClassVar[struct.Struct] = struct.Struct(f"<I{SPICE_TICKET_PUBKEY_BYTES}sIII")
    SIZE: ClassVar[int] = _STRUCT.size

    @classmethod
    def unpack(cls, data: bytes) -> "LinkReply":
        return cls(*_unpack(cls._STRUCT, data, "link reply"))


@dataclass(frozen=True)
class MainInit:
    """The first message sent by the server on the main channel."""

    session_id: int
    display_channels_hint: int
    supported_mouse_modes: int
    current_mouse_mode: int
    agent_connected: int
    agent_tokens: int
    multi_media_time: int
    ram_hint: int

    _STRUCT: ClassVar[struct.Struct] = struct.Struct("<8I")
    SIZE: ClassVar[int] = _STRUCT.size

    @classmethod
    def unpack(cls, data: bytes) -> "MainInit":
        return cls(*_unpack(cls._STRUCT, data, "main init"))


@dataclass(frozen=True)
class AgentMessage:
    """The header of a message carried to or from the guest agent."""

    protocol: int = VD_AGENT_PROTOCOL
    msg_type: int = 0
    opaque: int = 0
    size: int = 0

    _STRUCT: ClassVar[struct.Struct] = struct.Struct("<IIQI")
    SIZE: ClassVar[int] = _STRUCT.size

    def pack(self) -> bytes:
        return self._STRUCT.pack(self.protocol, self.msg_type, self.opaque, self.size)

    @classmethod
    def unpack(cls, data: bytes) -> "AgentMessage":
        return cls(*_unpack(cls._STRUCT, data, "agent message"))


def pack_mini_header(msg_type: int, size: int) -> bytes:
    """Pack the short data header that precedes every channel message."""
    return _MINI_HEADER.pack(msg_type, size)


def unpack_mini_header(data: bytes) -> tuple[int, int]:
    """Return ``(type, size)`` from a mini data header."""
    return _unpack(_MINI_HEADER, data, "mini header")


def pack_link_mess(
    connection_id: int,
    channel_type: int,
    channel_id: int,
    common_caps: Sequence[int],
    channel_caps: Sequence[int],
) -> bytes:
    """Pack a link message followed by its capability words."""
    head = _LINK_MESS.pack(
        connection_id,
        channel_type,
        channel_id,
        len(common_caps),
        len(channel_caps),
        _LINK_MESS.size,
    )
    words = [*common_caps, *channel_caps]
    return head + struct.pack(f"<{len(words)}I", *words)


def pack_key_code(code: int) -> bytes:
    return _KEY_CODE.pack(code)


def pack_mouse_mode(mode: int) -> bytes:
    return _MOUSE_MODE.pack(mode)


def pack_mouse_position(x: int, y: int, button_state: int, display_id: int = 0) -> bytes:
    return _MOUSE_POSITION.pack(x, y, button_state, display_id)


def pack_mouse_motion(x: int, y: int, button_state: int) -> bytes:
    return _MOUSE_MOTION.pack(x, y, button_state)


def pack_mouse_button(button: int, button_state: int) -> bytes:
    """Pack a mouse press or release message."""
    return _MOUSE_BUTTON.pack(button, button_state)


def unpack_ping(data: bytes) -> tuple[int, int]:
    """Return ``(id, timestamp)`` from a ping message."""
    return _unpack(_PING, data, "ping")


def pack_pong(ping_id: int, timestamp: int) -> bytes:
    return _PING.pack(ping_id, timestamp)


def unpack_set_ack(data: bytes) -> tuple[int, int]:
    """Return ``(generation, window)`` from a set-ack message."""
    return _unpack(_SET_ACK, data, "set ack")


def pack_ack_sync(generation: int) -> bytes:
    return _ACK_SYNC.pack(generation)


def unpack_notify(data: bytes) -> tuple[int, int, int, int, int]:
    """Return ``(time_stamp, severity, visibility, what, message_len)``."""
    return _unpack(_NOTIFY, data, "notify")


def caps_words(max_index: int) -> int:
    """Number of 32-bit words needed to hold capabilities up to ``max_index``."""
    return (((max_index + 32) // 8) & ~3) // 4


def set_capability(caps: list[int], index: int) -> None:
    """Set capability ``index`` in a list of capability words."""
    caps[index // 32] |= 1 << (index % 32)


def has_capability(caps: Sequence[int], index: int) -> bool:
    """Tell whether capability ``index`` is set."""
    word = index // 32
    if word >= len(caps):
        return False
    return bool((caps[word] >> (index % 32)) & 1)