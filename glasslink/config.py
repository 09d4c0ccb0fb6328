"""Client options, their defaults, and the parameters derived from them."""

from __future__ import annotations

import enum
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from .options import is_valid_bool, parse_bool

GLOBAL_CONFIG = Path("/etc/looking-glass-client.ini")
LOCAL_CONFIG_NAME = ".looking-glass-client.ini"

_MEGABYTE = 1048576
_SCANCODE_SCROLLLOCK = 71
_PAIR = re.compile(r"\s*([+-]?\d+)x\s*([+-]?\d+)")

OptionKey = tuple[str, str]


class ConfigError(Exception):
    """Raised for an option value that cannot be used or a file that cannot be read."""


class OptionType(enum.Enum):
    STRING = "string"
    INT = "int"
    BOOL = "bool"
    CUSTOM = "custom"


@dataclass(frozen=True)
class OptionSpec:
    """One configurable option and its default value."""

    module: str
    name: str
    description: str
    type: OptionType
    default: Any = None
    shortopt: Optional[str] = None
    values: tuple[str, ...] = ()

    @property
    def key(self) -> OptionKey:
        return (self.module, self.name)


def default_options() -> list[OptionSpec]:
    """Every option the client understands, in registration order."""
    S, I, B, C = OptionType.STRING, OptionType.INT, OptionType.BOOL, OptionType.CUSTOM
    pair_hint = "<left>x<top>, ie: 100x100"
    return [
        OptionSpec("app", "configFile", "A file to read additional configuration from", S, None, "C"),
        OptionSpec("app", "shmFile", "The path to the shared memory file", S,
                   "/dev/shm/looking-glass", "f"),
        OptionSpec("app", "shmSize",
                   "Specify the size in MB of the shared memory file (0 = detect)", I, 0, "L"),
        OptionSpec("app", "renderer", "Specify the renderer to use", C, "auto", "g"),
        OptionSpec("app", "license",
                   "Show the license for this application and then terminate", B, False, "l"),
        OptionSpec("app", "cursorPollInterval",
                   "How often to check for a cursor update in microseconds", I, 1000),
        OptionSpec("app", "framePollInterval",
                   "How often to check for a frame update in microseconds", I, 1000),

        OptionSpec("win", "title", "The window title", S, "Looking Glass (client)"),
        OptionSpec("win", "position", "Initial window position at startup", C, "center",
                   values=("center", pair_hint)),
        OptionSpec("win", "size", "Initial window size at startup", C, "1024x768",
                   values=(pair_hint,)),
        OptionSpec("win", "autoResize", "Auto resize the window to the guest", B, False, "a"),
        OptionSpec("win", "allowResize", "Allow the window to be manually resized", B, True, "n"),
        OptionSpec("win", "keepAspect", "Maintain the correct aspect ratio", B, True, "r"),
        OptionSpec("win", "borderless", "Borderless mode", B, False, "d"),
        OptionSpec("win", "fullScreen", "Launch in fullscreen borderless mode", B, False, "F"),
        OptionSpec("win", "maximize", "Launch window maximized", B, False, "T"),
        OptionSpec("win", "minimizeOnFocusLoss", "Minimize window on focus loss", B, True),
        OptionSpec("win", "fpsLimit",
                   "Frame rate limit (0 = disable - not recommended, -1 = auto detect)",
                   I, -1, "K"),
        OptionSpec("win", "showFPS", "Enable the FPS & UPS display", B, False, "k"),
        OptionSpec("win", "ignoreQuit", "Ignore requests to quit (ie: Alt+F4)", B, False, "Q"),
        OptionSpec("win", "noScreensaver", "Prevent the screensaver from starting", B, False, "S"),
        OptionSpec("win", "alerts", "Show on screen alert messages", B, True, "q"),

        OptionSpec("input", "grabKeyboard", "Grab the keyboard in capture mode", B, True, "G"),
        OptionSpec("input", "escapeKey", "Specify the escape key as an SDL scancode", I,
                   _SCANCODE_SCROLLLOCK, "m"),
        OptionSpec("input", "hideCursor", "Hide the local mouse cursor", B, True, "M"),
        OptionSpec("input", "mouseSens",
                   "Initial mouse sensitivity when in capture mode (-9 to 9)", I, 0),

        OptionSpec("spice", "enable",
                   "Enable the built in SPICE client for input and/or clipboard support",
                   B, True, "s"),
        OptionSpec("spice", "host", "The SPICE server host or UNIX socket", S, "127.0.0.1", "c"),
        OptionSpec("spice", "port", "The SPICE server port (0 = unix socket)", I, 5900, "p"),
        OptionSpec("spice", "input",
                   "Use SPICE to send keyboard and mouse input events to the guest", B, True),
        OptionSpec("spice", "clipboard",
                   "Use SPICE to syncronize the clipboard contents with the guest", B, True),
        OptionSpec("spice", "clipboardToVM",
                   "Allow the clipboard to be syncronized TO the VM", B, True),
        OptionSpec("spice", "clipboardToLocal",
                   "Allow the clipboard to be syncronized FROM the VM", B, True),
        OptionSpec("spice", "scaleCursor",
                   "Scale cursor input position to screen size when up/down scaled", B, True, "j"),
    ]


@dataclass
class AppParams:
    """Settings the client runs with, derived from the options."""

    auto_resize: bool = False
    allow_resize: bool = False
    keep_aspect: bool = False
    borderless: bool = False
    fullscreen: bool = False
    maximize: bool = False
    minimize_on_focus_loss: bool = False
    center: bool = True
    x: int = 0
    y: int = 0
    w: int = 1024
    h: int = 768
    shm_file: Optional[str] = None
    shm_size: int = 0
    fps_limit: int = 0
    show_fps: bool = False
    use_spice_input: bool = False
    use_spice_clipboard: bool = False
    spice_host: str = ""
    spice_port: int = 0
    clipboard_to_vm: bool = False
    clipboard_to_local: bool = False
    scale_mouse_input: bool = False
    hide_mouse: bool = False
    ignore_quit: bool = False
    no_screensaver: bool = False
    grab_keyboard: bool = False
    escape_key: int = 0
    show_alerts: bool = False
    cursor_poll_interval: int = 0
    frame_poll_interval: int = 0
    force_renderer: bool = False
    force_renderer_index: int = 0
    window_title: str = ""
    mouse_sens: int = 0
    config_file: Optional[str] = None
    show_license: bool = False
    extra: dict = field(default_factory=dict, repr=False)


def _parse_pair(value: str) -> Optional[tuple[int, int]]:
    match = _PAIR.match(value)
    if match is None:
        return None
    return int(match.group(1)), int(match.group(2))


def parse_position(value: str) -> Optional[tuple[int, int]]:
    """Return ``(x, y)`` for ``<x>x<y>``, or None for ``center``."""
    if value == "center":
        return None
    pair = _parse_pair(value)
    if pair is None:
        raise ConfigError(f"invalid window position: {value!r}")
    return pair


def parse_size(value: str) -> tuple[int, int]:
    """Return ``(w, h)`` for ``<w>x<h>``; both must be at least 1."""
    pair = _parse_pair(value)
    if pair is None or pair[0] < 1 or pair[1] < 1:
        raise ConfigError(f"invalid window size: {value!r}")
    return pair


def parse_renderer(value: str, renderer_names: Sequence[str]) -> Optional[int]:
    """Index of the named renderer, ignoring case, or None for ``auto``."""
    wanted = value.lower()
    if wanted == "auto":
        return None
    for index, name in enumerate(renderer_names):
        if name.lower() == wanted:
            return index
    raise ConfigError(f"unknown renderer: {value!r}")


def format_position(params: AppParams) -> str:
    if params.center:
        return "center"
    return f"{params.x}x{params.y}"


def format_size(params: AppParams) -> str:
    return f"{params.w}x{params.h}"


def format_renderer(params: AppParams, renderer_names: Sequence[str]) -> Optional[str]:
    """Name of the forced renderer, ``auto`` when none, None when the index is invalid."""
    if not params.force_renderer:
        return "auto"
    if not 0 <= params.force_renderer_index < len(renderer_names):
        return None
    return renderer_names[params.force_renderer_index]


def config_paths(home: str | os.PathLike | None = None) -> list[Path]:
    """The global and the per-user configuration files, in load order."""
    base = Path(home) if home is not None else Path.home()
    return [GLOBAL_CONFIG, base / LOCAL_CONFIG_NAME]


def _coerce(spec: OptionSpec, value: Any) -> Any:
    if spec.type is OptionType.BOOL:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and is_valid_bool(value):
            return parse_bool(value)
        raise ConfigError(f"{spec.module}:{spec.name} expects a boolean, got {value!r}")
    if spec.type is OptionType.INT:
        if isinstance(value, bool):
            raise ConfigError(f"{spec.module}:{spec.name} expects an integer, got {value!r}")
        if isinstance(value, int):
            return value
        try:
            return int(str(value).strip())
        except ValueError:
            raise ConfigError(
                f"{spec.module}:{spec.name} expects an integer, got {value!r}") from None
    if spec.type is OptionType.STRING:
        return None if value is None else str(value)
    return value


def params_from_options(values: Mapping[OptionKey, Any]) -> AppParams:
    """Build the run parameters from option values keyed by ``(module, name)``.

    Missing options take their defaults. Boolean and integer options may be
    given as strings. The renderer is ``"auto"``, None or a renderer index.
    """
    specs = {spec.key: spec for spec in default_options()}
    unknown = set(values) - set(specs)
    if unknown:
        names = ", ".join(sorted(f"{mod}:{name}" for mod, name in unknown))
        raise ConfigError(f"unknown options: {names}")

    opt = {key: _coerce(spec, values.get(key, spec.default)) for key, spec in specs.items()}
    p = AppParams()

    renderer = opt[("app", "renderer")]
    if renderer is None or (isinstance(renderer, str) and renderer.lower() == "auto"):
        p.force_renderer = False
    elif isinstance(renderer, int) and not isinstance(renderer, bool) and renderer >= 0:
        p.force_renderer = True
        p.force_renderer_index = renderer
    else:
        raise ConfigError(f"invalid renderer: {renderer!r}")

    position = parse_position(str(opt[("win", "position")]))
    if position is None:
        p.center = True
    else:
        p.center = False
        p.x, p.y = position
    p.w, p.h = parse_size(str(opt[("win", "size")]))

    p.config_file = opt[("app", "configFile")]
    p.show_license = opt[("app", "license")]
    p.shm_file = opt[("app", "shmFile")]
    p.shm_size = opt[("app", "shmSize")] * _MEGABYTE
    p.cursor_poll_interval = opt[("app", "cursorPollInterval")]
    p.frame_poll_interval = opt[("app", "framePollInterval")]

    p.window_title = opt[("win", "title")]
    p.auto_resize = opt[("win", "autoResize")]
    p.allow_resize = opt[("win", "allowResize")]
    p.keep_aspect = opt[("win", "keepAspect")]
    p.borderless = opt[("win", "borderless")]
    p.fullscreen = opt[("win", "fullScreen")]
    p.maximize = opt[("win", "maximize")]
    p.fps_limit = opt[("win", "fpsLimit")]
    p.show_fps = opt[("win", "showFPS")]
    p.ignore_quit = opt[("win", "ignoreQuit")]
    p.no_screensaver = opt[("win", "noScreensaver")]
    p.show_alerts = opt[("win", "alerts")]
    p.minimize_on_focus_loss = opt[("win", "minimizeOnFocusLoss")]

    p.grab_keyboard = opt[("input", "grabKeyboard")]
    p.escape_key = opt[("input", "escapeKey")]
    p.hide_mouse = opt[("input", "hideCursor")]
    p.mouse_sens = opt[("input", "mouseSens")]

    if opt[("spice", "enable")]:
        p.spice_host = opt[("spice", "host")]
        p.spice_port = opt[("spice", "port")]
        p.use_spice_input = opt[("spice", "input")]
        p.use_spice_clipboard = opt[("spice", "clipboard")]
        if p.use_spice_clipboard:
            p.clipboard_to_vm = opt[("spice", "clipboardToVM")]
            p.clipboard_to_local = opt[("spice", "clipboardToLocal")]
            if not p.clipboard_to_vm and not p.clipboard_to_local:
                p.use_spice_clipboard = False
        p.scale_mouse_input = opt[("spice", "scaleCursor")]

    return p


def read_file(path: str | os.PathLike) -> bytes:
    """Return the whole contents of a file."""
    try:
        return Path(path).read_bytes()
    except OSError as exc:
        raise ConfigError(f"failed to read the file: {path}") from exc