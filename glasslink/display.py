"""Geometry and timing of the client window: placement, scaling, frame pacing."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Optional

_NANOSECONDS = 1_000_000_000
DEFAULT_FPS_LIMIT = 200
AUTO_FPS_LIMIT = -1
MOUSE_SENS_MIN = -9
MOUSE_SENS_MAX = 9

_F32 = struct.Struct("<f")


def _f32(value: float) -> float:
    """Round ``value`` to single precision, as the window maths is done."""
    return _F32.unpack(_F32.pack(value))[0]


@dataclass(frozen=True)
class Rect:
    """Where the guest frame is drawn inside the window."""

    x: int
    y: int
    w: int
    h: int
    valid: bool = True

    def contains(self, px: int, py: int) -> bool:
        """Tell whether a window point lies on the frame, edges included."""
        return self.x <= px <= self.x + self.w and self.y <= py <= self.y + self.h


def compute_destination(window_w: int, window_h: int, src_w: int, src_h: int,
                        keep_aspect: bool) -> Rect:
    """Place a ``src_w`` x ``src_h`` frame in the window.

    With ``keep_aspect`` the frame is letterboxed or pillarboxed and centred;
    otherwise it fills the whole window.
    """
    if window_w <= 0 or window_h <= 0:
        raise ValueError("window size must be positive")
    if src_w <= 0 or src_h <= 0:
        raise ValueError("source size must be positive")

    if not keep_aspect:
        return Rect(0, 0, window_w, window_h)

    src_aspect = _f32(_f32(src_h) / _f32(src_w))
    wnd_aspect = _f32(_f32(window_h) / _f32(window_w))
    if wnd_aspect < src_aspect:
        w = int(_f32(_f32(window_h) / src_aspect))
        h = window_h
        return Rect((window_w >> 1) - (w >> 1), 0, w, h)

    w = window_w
    h = int(_f32(_f32(window_w) * src_aspect))
    return Rect(0, (window_h >> 1) - (h >> 1), w, h)


def scale_factors(src_w: int, src_h: int, rect: Rect) -> tuple[float, float]:
    """Return ``(scale_x, scale_y)`` mapping window movement onto the guest.

    As the client has always done, the x factor is taken from the heights and
    the y factor from the widths.
    """
    if rect.w <= 0 or rect.h <= 0:
        raise ValueError("destination rectangle must have a positive size")
    scale_x = _f32(_f32(src_h) / _f32(rect.h))
    scale_y = _f32(_f32(src_w) / _f32(rect.w))
    return scale_x, scale_y


def frame_time_ns(fps_limit: int, refresh_rate: Optional[int] = None) -> int:
    """Nanoseconds between rendered frames.

    ``fps_limit`` of -1 asks for twice the monitor ``refresh_rate``, falling back
    to 200 frames per second when the rate is unknown; 0 disables the limit.
    """
    if fps_limit == AUTO_FPS_LIMIT:
        if refresh_rate is not None and refresh_rate > 0:
            return int(_NANOSECONDS / (refresh_rate * 2))
        return int(_NANOSECONDS / DEFAULT_FPS_LIMIT)
    if fps_limit == 0:
        return 0
    if fps_limit < 0:
        raise ValueError(f"invalid frame rate limit: {fps_limit}")
    return int(_NANOSECONDS / fps_limit)


def clamp_sensitivity(value: int) -> int:
    """Keep a mouse sensitivity within -9 to 9."""
    return max(MOUSE_SENS_MIN, min(MOUSE_SENS_MAX, value))


def sensitivity_message(value: int) -> str:
    """The on-screen alert text for a mouse sensitivity."""
    sign = "+" if value > 0 else ""
    return f"Sensitivity: {sign}{value}"