import numpy as np
import pytest

from pencel_map.core_types import MatchResult, PencilInfo
from pencel_map.errors import EmptyPaletteError, InvalidParameterError
from pencel_map.matcher import (
    best_match,
    candidate_table,
    match_image,
    match_pixels,
    matches_to_image,
)
from pencel_map.metrics import colour_distance, metric_names
from pencel_map.palette_data import build_palette


def test_first_entry_heavy_tone_wins_exact_tie():
    palette = [
        PencilInfo("A", 0xFF0000, 0xFF0000),
        PencilInfo("B", 0xFF0000, 0x000000),
    ]
    result = best_match(0xFF0000, palette)
    assert result == MatchResult(index=0, heavy=True, distance=0.0)


def test_light_tone_selected_when_closer():
    palette = [PencilInfo("Grey", 0x202020, 0xE0E0E0)]
    result = best_match((250, 250, 250), palette)
    assert result.index == 0
    assert result.heavy is False


def test_later_duplicate_never_wins():
    palette = [
        PencilInfo("Blue", 0x0000FF, 0x8080FF),
        PencilInfo("Other", 0x00FF00, 0x00FF00),
        PencilInfo("Blue again", 0x0000FF, 0x0000FF),
    ]
    for metric in metric_names():
        result = best_match(0x0000F0, palette, metric=metric)
        assert (result.index, result.heavy) == (0, True)


def test_alpha_is_ignored():
    palette = [PencilInfo("Red", 0xFFFF0000, 0x80FF8080)]
    assert best_match(0x00FF0000, palette).distance == 0.0


def test_empty_palette_is_reported():
    with pytest.raises(EmptyPaletteError):
        best_match(0x123456, [])
    with pytest.raises(EmptyPaletteError):
        match_pixels(bytes(3), 1, 1, [])
    with pytest.raises(EmptyPaletteError):
        candidate_table([])


def test_unknown_metric_is_invalid_parameter():
    palette = build_palette()
    with pytest.raises(InvalidParameterError):
        best_match(0, palette, metric="manhattan")


@pytest.mark.parametrize("metric", ["redmean", "euclidean", "lab", "ciede2000"])
def test_metrics_are_symmetric_and_zero_only_for_equal(metric):
    colours = [(0, 0, 0), (255, 255, 255), (200, 30, 60), (12, 130, 250), (201, 30, 60)]
    for a in colours:
        assert colour_distance(a, a, metric) == 0.0
        for b in colours:
            d_ab = colour_distance(a, b, metric)
            d_ba = colour_distance(b, a, metric)
            assert d_ab >= 0.0
            assert d_ab == pytest.approx(d_ba, abs=1e-9)
            if a != b:
                assert d_ab > 0.0


def test_candidate_table_interleaves_tones():
    palette = [PencilInfo("A", 0x010203, 0x040506), PencilInfo("B", 0x070809, 0x0A0B0C)]
    rgb, keys = candidate_table(palette)
    assert rgb.tolist() == [[1, 2, 3], [4, 5, 6], [7, 8, 9], [10, 11, 12]]
    assert keys == [(0, True), (0, False), (1, True), (1, False)]


def test_match_pixels_is_row_major():
    palette = [
        PencilInfo("Red", 0xFF0000, 0xFF8080),
        PencilInfo("Green", 0x00FF00, 0x80FF80),
        PencilInfo("Blue", 0x0000FF, 0x8080FF),
        PencilInfo("Black", 0x000000, 0x404040),
    ]
    # (0,0) red, (1,0) green, (0,1) blue, (1,1) black
    buf = np.array([255, 0, 0, 0, 255, 0, 0, 0, 255, 0, 0, 0], dtype=np.uint8)
    matches = match_pixels(buf, 2, 2, palette)
    assert [m.index for m in matches] == [0, 1, 2, 3]
    assert all(m.heavy and m.distance == 0.0 for m in matches)


@pytest.mark.parametrize("metric", ["redmean", "lab"])
def test_match_pixels_agrees_with_best_match(metric):
    palette = build_palette()
    rng = np.random.default_rng(11)
    buf = rng.integers(0, 256, size=6 * 5 * 3, dtype=np.uint8)
    matches = match_pixels(buf, 6, 5, palette, metric=metric, workers=2)
    assert len(matches) == 30
    for k, m in enumerate(matches):
        expected = best_match(tuple(buf[3 * k : 3 * k + 3].tolist()), palette, metric)
        assert (m.index, m.heavy) == (expected.index, expected.heavy)
        assert m.distance == pytest.approx(expected.distance)


def test_ties_resolve_the_same_way_in_every_band():
    palette = [
        PencilInfo("A", 0xFF0000, 0xFF0000),
        PencilInfo("B", 0xFF0000, 0x000000),
        PencilInfo("C", 0x000000, 0x00FF00),
    ]
    rng = np.random.default_rng(5)
    img = rng.integers(0, 256, size=(40, 40, 3), dtype=np.uint8)
    img[0] = (255, 0, 0)
    img[-1] = (0, 0, 0)
    # enough unique colours for four threaded bands
    assert np.unique(img.reshape(-1, 3), axis=0).shape[0] > 4 * 64
    buf = img.reshape(-1)
    matches = match_pixels(buf, 40, 40, palette, workers=4)
    assert matches == match_pixels(buf, 40, 40, palette, workers=1)
    for k in range(0, 40 * 40, 7):
        expected = best_match(tuple(buf[3 * k : 3 * k + 3].tolist()), palette)
        assert (matches[k].index, matches[k].heavy) == (expected.index, expected.heavy)
    assert all(m == MatchResult(0, True, 0.0) for m in matches[:40])
    assert all(m == MatchResult(1, False, 0.0) for m in matches[-40:])


def test_out_of_range_channels_are_rejected():
    palette = build_palette()
    with pytest.raises(InvalidParameterError):
        best_match((300, 0, 0), palette)
    with pytest.raises(InvalidParameterError):
        best_match(np.array([-1, 0, 0]), palette)
    with pytest.raises(InvalidParameterError):
        colour_distance((0, 0, 0), (0, 256, 0))
    assert best_match((255, 255, 255), palette).distance >= 0.0


def test_match_pixels_rejects_bad_size():
    palette = build_palette()
    with pytest.raises(InvalidParameterError):
        match_pixels(bytes(6), 0, 2, palette)
    with pytest.raises(InvalidParameterError):
        match_pixels(bytes(5), 1, 2, palette)


def test_match_image_and_back_to_colours():
    palette = [PencilInfo("Black", 0x000000, 0x555555), PencilInfo("White", 0xFFFFFF, 0xAAAAAA)]
    img = np.array([[[0, 0, 0], [250, 250, 250]], [[90, 90, 90], [160, 160, 160]]], dtype=np.uint8)
    matches = match_image(img, palette)
    out = matches_to_image(matches, 2, 2, palette)
    assert out.tolist() == [
        [[0, 0, 0], [255, 255, 255]],
        [[85, 85, 85], [170, 170, 170]],
    ]
    with pytest.raises(InvalidParameterError):
        matches_to_image(matches, 3, 2, palette)
