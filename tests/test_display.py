import pytest

from glasslink.display import (
    Rect,
    clamp_sensitivity,
    compute_destination,
    frame_time_ns,
    scale_factors,
    sensitivity_message,
)


def test_fill_window_without_aspect():
    rect = compute_destination(800, 600, 1920, 1080, keep_aspect=False)
    assert rect == Rect(0, 0, 800, 600)
    assert rect.valid is True


@pytest.mark.parametrize("window", [(1000, 1000), (640, 480), (1280, 1024)])
def test_letterbox_fills_width_and_centres(window):
    ww, wh = window
    rect = compute_destination(ww, wh, 1920, 1080, keep_aspect=True)
    assert rect.x == 0
    assert rect.w == ww
    assert rect.h <= wh
    assert rect.y == (wh >> 1) - (rect.h >> 1)


@pytest.mark.parametrize("window", [(1920, 600), (3000, 1080), (800, 200)])
def test_pillarbox_fills_height_and_centres(window):
    ww, wh = window
    rect = compute_destination(ww, wh, 1920, 1080, keep_aspect=True)
    assert rect.y == 0
    assert rect.h == wh
    assert rect.w <= ww
    assert rect.x == (ww >> 1) - (rect.w >> 1)


def test_matching_aspect_fills_window():
    rect = compute_destination(1920, 1080, 1920, 1080, keep_aspect=True)
    assert rect == Rect(0, 0, 1920, 1080)


def test_aspect_preserved_closely():
    rect = compute_destination(1000, 1000, 1920, 1080, keep_aspect=True)
    assert abs(rect.h / rect.w - 1080 / 1920) < 0.01


@pytest.mark.parametrize("args", [(0, 100, 10, 10), (100, 100, 0, 10), (100, 100, 10, -1)])
def test_invalid_sizes_raise(args):
    with pytest.raises(ValueError):
        compute_destination(*args, keep_aspect=True)


def test_scale_factors_identity():
    assert scale_factors(1920, 1080, Rect(0, 0, 1920, 1080)) == (1.0, 1.0)


def test_scale_factors_uses_heights_for_x():
    sx, sy = scale_factors(800, 600, Rect(0, 0, 400, 300))
    assert sx == 2.0
    assert sy == 2.0
    sx, sy = scale_factors(100, 50, Rect(0, 0, 100, 25))
    assert sx == 2.0
    assert sy == 1.0


def test_scale_factors_rejects_empty_rect():
    with pytest.raises(ValueError):
        scale_factors(100, 100, Rect(0, 0, 0, 10))


def test_frame_time_auto_defaults_to_200_fps():
    assert frame_time_ns(-1, None) == frame_time_ns(200)
    assert frame_time_ns(-1, 0) == frame_time_ns(200)


def test_frame_time_auto_doubles_refresh_rate():
    assert frame_time_ns(-1, 60) == frame_time_ns(120)
    assert frame_time_ns(-1, 144) == frame_time_ns(288)


def test_frame_time_fixed_limit():
    assert frame_time_ns(1) == 1_000_000_000
    assert frame_time_ns(100) < frame_time_ns(50)


def test_frame_time_disabled_and_invalid():
    assert frame_time_ns(0) == 0
    with pytest.raises(ValueError):
        frame_time_ns(-5)


@pytest.mark.parametrize("value,expected", [(-20, -9), (-9, -9), (0, 0), (5, 5), (9, 9), (42, 9)])
def test_clamp_sensitivity(value, expected):
    assert clamp_sensitivity(value) == expected


def test_sensitivity_message_signs():
    assert sensitivity_message(3) == "Sensitivity: +3"
    assert sensitivity_message(0) == "Sensitivity: 0"
    assert sensitivity_message(-4) == "Sensitivity: -4"


def test_rect_contains_edges():
    rect = Rect(10, 20, 100, 50)
    assert rect.contains(10, 20)
    assert rect.contains(110, 70)
    assert not rect.contains(9, 20)
    assert not rect.contains(50, 71)