from __future__ import annotations
from pathlib import Path

import cv2
import numpy as np
import pytest

from c4scan.core.config import DEFAULT_CFG, load_cfg, merge_cfg
from c4scan.core.contracts import Corners
from c4scan.geometry.primitives import Circle, Point
from c4scan.io.debug import BGR_BOARD, BGR_RED, FileSink, NullSink, draw_corners, draw_tokens
from c4scan.io.ingest import load_image, to_work_size

ROOT = Path(__file__).resolve().parents[1]


# ---------- config ---------- #

def test_repo_config_matches_defaults():
    cfg = load_cfg(ROOT / "config" / "board.yaml")
    assert list(cfg["work_size"]) == list(DEFAULT_CFG["work_size"])
    assert cfg["grid"] == DEFAULT_CFG["grid"]
    assert cfg["search"] == DEFAULT_CFG["search"]
    assert cfg["hough"] == DEFAULT_CFG["hough"]
    assert cfg["min_board_area_ratio"] == DEFAULT_CFG["min_board_area_ratio"]
    for color in ("board", "red", "yellow"):
        assert np.array(cfg["colors"][color]).tolist() == np.array(DEFAULT_CFG["colors"][color]).tolist()


def test_merge_keeps_unset_nested_values():
    cfg = merge_cfg({"search": {"weights": {"three": 50}}, "debug": True})
    assert cfg["search"]["weights"] == {"three": 50, "two": 2, "center": 3}
    assert cfg["search"]["max_depth"] == DEFAULT_CFG["search"]["max_depth"]
    assert cfg["debug"] is True


def test_merge_does_not_touch_defaults():
    cfg = merge_cfg(None)
    cfg["search"]["weights"]["three"] = 99
    cfg["grid"]["rows"] = 9
    assert DEFAULT_CFG["search"]["weights"]["three"] == 5
    assert DEFAULT_CFG["grid"]["rows"] == 6


def test_load_cfg_rejects_non_mapping(tmp_path):
    p = tmp_path / "bad.yaml"
    p.write_text("- a\n- b\n")
    with pytest.raises(ValueError):
        load_cfg(p)


def test_load_cfg_empty_file_gives_defaults(tmp_path):
    p = tmp_path / "empty.yaml"
    p.write_text("")
    assert load_cfg(p)["grid"] == DEFAULT_CFG["grid"]


# ---------- ingest ---------- #

def test_load_image_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_image(str(tmp_path / "missing.jpg"))


def test_load_image_reads_bgr(tmp_path):
    img = np.zeros((20, 30, 3), np.uint8)
    img[:, :, 0] = 200
    p = tmp_path / "blue.png"
    cv2.imwrite(str(p), img)
    got = load_image(str(p))
    assert got.shape == (20, 30, 3)
    assert (got[:, :, 0] == 200).all()


def test_to_work_size():
    img = np.zeros((600, 700, 3), np.uint8)
    assert to_work_size(img, None) is img
    assert to_work_size(img, (622, 457)).shape == (457, 622, 3)
    assert to_work_size(img, [700, 600]) is img
    with pytest.raises(ValueError):
        to_work_size(img, (0, 10))


# ---------- debug sinks ---------- #

def test_file_sink_numbers_and_sanitizes(tmp_path):
    sink = FileSink(tmp_path / "out")
    img = np.zeros((10, 10, 3), np.uint8)
    sink.show(img, "board outline")
    sink.show(img, "../tokens")
    assert [p.name for p in sink.written] == ["01_board_outline.png", "02_tokens.png"]
    assert all(p.parent == tmp_path / "out" for p in sink.written)


def test_null_sink_accepts_anything():
    NullSink().show(np.zeros((2, 2), np.uint8), "x")


def test_draw_tokens_paints_discs():
    canvas = draw_tokens((100, 120, 3), [Circle(Point(30, 40), 10)], [])
    assert canvas.shape == (100, 120, 3)
    assert tuple(canvas[40, 30]) == BGR_RED
    assert tuple(canvas[90, 110]) == BGR_BOARD


def test_draw_corners_marks_each_corner():
    img = np.zeros((100, 120, 3), np.uint8)
    corners = Corners(pts=[[10, 10], [110, 12], [108, 90], [12, 88]])
    out = draw_corners(img, corners)
    assert tuple(out[10, 10]) == BGR_RED
    assert tuple(out[88, 12]) == BGR_RED
    assert tuple(out[90, 108]) == BGR_RED
    assert not img.any()
