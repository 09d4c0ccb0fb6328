import struct

import pytest

from glasslink import messages
from glasslink.messages import (
    AgentMessage,
    LinkHeader,
    LinkReply,
    MainInit,
    caps_words,
    has_capability,
    pack_ack_sync,
    pack_key_code,
    pack_link_mess,
    pack_mini_header,
    pack_mouse_button,
    pack_mouse_mode,
    pack_mouse_motion,
    pack_mouse_position,
    pack_pong,
    set_capability,
    unpack_mini_header,
    unpack_notify,
    unpack_ping,
    unpack_set_ack,
)


def test_mini_header_wire_bytes():
    assert pack_mini_header(messages.SPICE_MSGC_ACK, 1) == b"\x02\x00\x01\x00\x00\x00"


def test_mini_header_round_trip():
    data = pack_mini_header(messages.SPICE_MSG_MAIN_AGENT_DATA, 70000)
    assert len(data) == messages.MINI_HEADER_SIZE
    assert unpack_mini_header(data) == (messages.SPICE_MSG_MAIN_AGENT_DATA, 70000)


def test_mini_header_too_short():
    with pytest.raises(ValueError):
        unpack_mini_header(b"\x01\x00")


def test_link_header_starts_with_magic():
    assert LinkHeader(size=42).pack()[:4] == b"REDQ"


def test_link_header_round_trip():
    header = LinkHeader(size=1234)
    decoded = LinkHeader.unpack(header.pack())
    assert decoded == header
    assert decoded.major_version == messages.SPICE_VERSION_MAJOR


def test_link_header_too_short():
    with pytest.raises(ValueError):
        LinkHeader.unpack(b"REDQ")


def test_link_mess_layout():
    data = pack_link_mess(7, messages.SPICE_CHANNEL_INPUTS, 0, [0b1011], [4])
    assert len(data) == messages.LINK_MESS_SIZE + 4 * 2
    fields = struct.unpack_from("<IBBIII", data)
    assert fields == (7, messages.SPICE_CHANNEL_INPUTS, 0, 1, 1, messages.LINK_MESS_SIZE)
    assert struct.unpack_from("<2I", data, messages.LINK_MESS_SIZE) == (0b1011, 4)


def test_link_reply_unpack():
    key = bytes(range(messages.SPICE_TICKET_PUBKEY_BYTES))
    raw = struct.pack(f"<I{len(key)}sIII", 0, key, 1, 2, 99)
    reply = LinkReply.unpack(raw)
    assert reply.error == messages.SPICE_LINK_ERR_OK
    assert reply.pub_key == key
    assert (reply.num_common_caps, reply.num_channel_caps, reply.caps_offset) == (1, 2, 99)


def test_link_reply_too_short():
    with pytest.raises(ValueError):
        LinkReply.unpack(b"\x00" * 10)


def test_main_init_unpack():
    raw = struct.pack("<8I", 11, 12, 13, 14, 15, 16, 17, 18)
    init = MainInit.unpack(raw)
    assert init.session_id == 11
    assert init.agent_connected == 15
    assert init.agent_tokens == 16
    assert init.ram_hint == 18


def test_agent_message_round_trip():
    msg = AgentMessage(msg_type=messages.VD_AGENT_CLIPBOARD, size=300)
    decoded = AgentMessage.unpack(msg.pack())
    assert decoded == msg
    assert decoded.protocol == messages.VD_AGENT_PROTOCOL


def test_key_code_and_mouse_mode():
    assert struct.unpack("<I", pack_key_code(0xE05B)) == (0xE05B,)
    assert struct.unpack("<H", pack_mouse_mode(messages.SPICE_MOUSE_MODE_CLIENT)) == (
        messages.SPICE_MOUSE_MODE_CLIENT,
    )


def test_mouse_position_fields():
    data = pack_mouse_position(10, 20, messages.SPICE_MOUSE_BUTTON_MASK_LEFT, 0)
    assert struct.unpack("<IIHB", data) == (10, 20, messages.SPICE_MOUSE_BUTTON_MASK_LEFT, 0)


def test_mouse_motion_negative():
    data = pack_mouse_motion(-5, 7, 0)
    assert struct.unpack("<iiH", data) == (-5, 7, 0)


def test_mouse_button():
    data = pack_mouse_button(messages.SPICE_MOUSE_BUTTON_RIGHT, messages.SPICE_MOUSE_BUTTON_MASK_RIGHT)
    assert struct.unpack("<BH", data) == (
        messages.SPICE_MOUSE_BUTTON_RIGHT,
        messages.SPICE_MOUSE_BUTTON_MASK_RIGHT,
    )


def test_ping_pong_share_layout():
    assert unpack_ping(pack_pong(7, 2**40)) == (7, 2**40)


def test_set_ack_and_sync():
    assert unpack_set_ack(struct.pack("<II", 3, 10)) == (3, 10)
    assert pack_ack_sync(3) == struct.pack("<I", 3)


def test_notify_header():
    raw = struct.pack("<QIIII", 100, 1, 2, 3, 5) + b"hello\x00"
    assert unpack_notify(raw) == (100, 1, 2, 3, 5)
    with pytest.raises(ValueError):
        unpack_notify(raw[:8])


def test_capabilities_set_and_test():
    caps = [0] * caps_words(messages.SPICE_COMMON_CAP_MINI_HEADER)
    set_capability(caps, messages.SPICE_COMMON_CAP_AUTH_SPICE)
    set_capability(caps, messages.SPICE_COMMON_CAP_MINI_HEADER)
    assert has_capability(caps, messages.SPICE_COMMON_CAP_AUTH_SPICE)
    assert has_capability(caps, messages.SPICE_COMMON_CAP_MINI_HEADER)
    assert not has_capability(caps, messages.SPICE_COMMON_CAP_AUTH_SASL)
    assert not has_capability(caps, 200)


@pytest.mark.parametrize("index", range(0, 100))
def test_caps_words_covers_index(index):
    caps = [0] * caps_words(index)
    set_capability(caps, index)
    assert has_capability(caps, index)