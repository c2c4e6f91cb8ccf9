"""Tests for delimiter detection and span derivation."""

from __future__ import annotations

import numpy as np
import pytest

from iconcaptcha.engine.context import IconResult, Span
from iconcaptcha.engine.segmenter import (
    delimiter_columns,
    find_spans,
    locate_icons,
    span_between,
)
from tests.conftest import HEIGHT, ODD_ONE_OUT, T_MASK, make_strip


class TestDelimiterColumns:
    def test_gray_delimiters(self, odd_one_out_strip):
        assert delimiter_columns(odd_one_out_strip) == [20, 41, 62]

    def test_mixed_colors(self, light_delimiter_strip):
        assert delimiter_columns(light_delimiter_strip) == [20, 41, 62, 83]

    def test_alpha_is_ignored(self):
        img = np.zeros((4, 10, 4), dtype=np.uint8)
        img[0, 3, :3] = (64, 64, 64)  # alpha stays 0
        img[0, 7] = (240, 240, 240, 17)
        assert delimiter_columns(img) == [3, 7]

    def test_near_miss_colors_are_not_delimiters(self):
        img = np.zeros((4, 10, 4), dtype=np.uint8)
        img[0, 2] = (64, 64, 65, 255)
        img[0, 5] = (239, 240, 240, 255)
        assert delimiter_columns(img) == []

    def test_only_top_row_is_scanned(self):
        img = np.zeros((4, 10, 4), dtype=np.uint8)
        img[1:, 4] = (64, 64, 64, 255)
        assert delimiter_columns(img) == []

    def test_custom_colors(self):
        img = np.zeros((2, 6, 4), dtype=np.uint8)
        img[0, 1] = (1, 2, 3, 255)
        img[0, 4] = (64, 64, 64, 255)
        assert delimiter_columns(img, colors=[(1, 2, 3)]) == [1]


class TestSpanBetween:
    def test_first_span(self):
        assert span_between(0, 20) == Span(start=1, end=19, center_x=10)

    def test_inner_span(self):
        assert span_between(41, 62) == Span(start=42, end=61, center_x=51)

    def test_center_floors(self):
        # (16 - 11) // 2 == 2
        assert span_between(10, 17).center_x == 13
        # (17 - 11) // 2 == 3
        assert span_between(10, 18).center_x == 14


class TestFindSpans:
    def test_k_delimiters_give_k_plus_one_spans(self, odd_one_out_strip):
        spans = find_spans(odd_one_out_strip)
        assert len(spans) == 4
        assert [(s.start, s.end, s.center_x) for s in spans] == [
            (1, 19, 10),
            (21, 40, 30),
            (42, 61, 51),
            (63, 82, 72),
        ]

    @pytest.mark.parametrize("n", [2, 3, 5, 8])
    def test_spans_are_ordered_and_disjoint(self, n):
        img = make_strip([T_MASK] * n)
        spans = find_spans(img)
        assert len(spans) == n
        for left, right in zip(spans, spans[1:]):
            assert left.start < left.end
            # one column before the delimiter, the delimiter, then the next span
            assert right.start - left.end == 2
        assert spans[0].start == 1
        assert spans[-1].end == img.shape[1] - 1

    def test_center_inside_span(self, light_delimiter_strip):
        for span in find_spans(light_delimiter_strip):
            assert span.start <= span.center_x <= span.end

    def test_no_delimiter_is_single_span(self, no_delimiter_strip):
        spans = find_spans(no_delimiter_strip)
        assert spans == [Span(start=1, end=59, center_x=30)]

    def test_adjacent_delimiters_give_degenerate_span(self):
        img = np.zeros((4, 12, 4), dtype=np.uint8)
        img[0, 5] = (64, 64, 64, 255)
        img[0, 6] = (64, 64, 64, 255)
        spans = find_spans(img)
        assert len(spans) == 3
        assert spans[1].end <= spans[1].start


class TestLocateIcons:
    def test_positions_and_center_y(self):
        img = make_strip(ODD_ONE_OUT, height=HEIGHT + 1)
        icons = locate_icons(img)
        assert [i.position for i in icons] == [1, 2, 3, 4]
        assert all(i.center_y == (HEIGHT + 1) // 2 for i in icons)
        assert icons[2] == IconResult(position=3, start=42, end=61, center_x=51, center_y=25)

    def test_str_format(self):
        icon = IconResult(position=2, start=21, end=40, center_x=30, center_y=25)
        assert str(icon) == "Icon { position: 2, start: 21, end: 40, center_x: 30, center_y: 25 }"
