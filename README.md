# glasslink

glasslink holds the building blocks of a viewer that shows a virtual
machine's frames and sends it keyboard, mouse and clipboard traffic over the
SPICE protocol: the wire structures, the guest agent's clipboard messages,
scancode mapping, option handling and window geometry. It has no
dependencies beyond the standard library.

## Modules

- `glasslink.messages`: SPICE and guest-agent constants, the `DataType`
  enum of clipboard payloads, the dataclasses `LinkHeader`, `LinkReply`,
  `MainInit` and `AgentMessage` with `pack`/`unpack`, packing helpers for
  the input messages (`pack_key_code`, `pack_mouse_mode`,
  `pack_mouse_position`, `pack_mouse_motion`, `pack_mouse_button`), the
  common messages (`unpack_ping`, `pack_pong`, `unpack_set_ack`,
  `pack_ack_sync`, `unpack_notify`), `pack_mini_header` /
  `unpack_mini_header`, `pack_link_mess`, and the capability bit helpers
  `caps_words`, `set_capability` and `has_capability`.
- `glasslink.agent`: clipboard payloads for the guest agent
  (`build_clipboard_grab`, `build_clipboard_release`,
  `build_clipboard_data`, `build_clipboard_request`), capability
  announcements (`pack_agent_caps`, `parse_agent_caps`), type mapping
  (`spice_to_agent_type`, `agent_to_spice_type`), `split_agent_payload`
  for chunking large payloads, and `ClipboardBuffer`, which reassembles
  clipboard data received over several messages. Errors raise `AgentError`.
- `glasslink.keymap.map_scancode`: USB HID scancode to PS/2 set 1 code,
  0 when there is none.
- `glasslink.options`: `is_valid_bool` and `parse_bool` for boolean option
  words.
- `glasslink.fifo.RequestQueue`: a locked first-in first-out queue with
  `push`, `shift`, `peek`, `len()` and iteration.
- `glasslink.config`: the option table (`default_options`, `OptionSpec`),
  `parse_position`, `parse_size`, `parse_renderer` and their `format_*`
  counterparts, `config_paths`, `read_file`, and `params_from_options`,
  which turns option values into an `AppParams`. Bad values raise
  `ConfigError`.
- `glasslink.display`: `compute_destination` (where the frame sits in the
  window, as a `Rect`), `scale_factors`, `frame_time_ns`,
  `clamp_sensitivity` and `sensitivity_message`.

## Example

```python
from glasslink.agent import ClipboardBuffer, build_clipboard_grab
from glasslink.config import params_from_options
from glasslink.display import compute_destination, frame_time_ns
from glasslink.keymap import map_scancode
from glasslink.messages import DataType, LinkHeader, pack_key_code

map_scancode(4)                      # 0x1E, the PS/2 code for "A"
pack_key_code(0x1E)                  # b"\x1e\x00\x00\x00"
LinkHeader.unpack(LinkHeader(size=18).pack()).size   # 18

build_clipboard_grab(DataType.TEXT, selection=False)  # b"\x01\x00\x00\x00"

buf = ClipboardBuffer()
buf.start(5)
buf.feed(b"hel")
buf.feed(b"lo")                      # True: the transfer is complete
buf.take()                           # b"hello"

params = params_from_options({("win", "size"): "800x600", ("win", "keepAspect"): "yes"})
rect = compute_destination(params.w, params.h, 1920, 1080, params.keep_aspect)
frame_time_ns(-1, refresh_rate=60)   # 8333333
```

## Boolean option values

`parse_bool` accepts `1`, `true`, `yes`, `on` and `enable` as true;
`is_valid_bool` additionally accepts `0`, `false`, `no`, `off` and
`disable`. Matching ignores case.

## What this package does not do

It does not open network connections to a SPICE server, encrypt the login
ticket, or run the main and inputs channels; it only builds and reads the
bytes those exchanges use. It has no window, renderer, shared-memory frame
reader or event loop, and installs no command.