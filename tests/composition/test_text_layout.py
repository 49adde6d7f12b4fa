"""
Tests for text overlay layout.
"""

import pytest

from adcraft.composition.text_layout import (
    band_height,
    chars_per_line,
    compute_layout,
    logo_size,
    wrap_text,
)

class TestWrapping:
    """
    Tests for line wrapping.
    """

    def test_chars_per_line(self):
        """
        Test the average glyph width heuristic.
        """
        assert chars_per_line(1080, 60) == 30
        assert chars_per_line(1920, 96) == 33
        assert chars_per_line(10, 100) == 1

    def test_short_text_is_one_line(self):
        """
        Test that text shorter than a line is not wrapped.
        """
        assert wrap_text("Hello World", 30) == ["Hello World"]

    def test_sixty_characters_wrap_to_two_lines(self):
        """
        Test greedy word packing.
        """
        text = "abcdef " + " ".join(["abcde"] * 9)
        assert len(text) == 60

        lines = wrap_text(text, 30)

        assert len(lines) == 2
        assert all(len(line) <= 30 for line in lines)
        assert " ".join(lines) == text

    def test_long_word_is_split(self):
        """
        Test that a word longer than a line is split across lines.
        """
        assert wrap_text("a" * 25, 10) == ["a" * 10, "a" * 10, "a" * 5]
        assert wrap_text("hi " + "b" * 12 + " yo", 10) == ["hi", "b" * 10, "bb yo"]

    def test_whitespace_is_collapsed(self):
        """
        Test that repeated whitespace does not produce empty lines.
        """
        assert wrap_text("  Hello \n  World  ", 30) == ["Hello World"]


class TestComputeLayout:
    """
    Tests for compute_layout.
    """

    def test_band_height(self):
        """
        Test band sizing and its minimum height.
        """
        assert band_height(1, 54, 20) == pytest.approx(max(54 * 1.4 + 40 + 27, 54 * 2.5))
        assert band_height(3, 40, 20) == pytest.approx(3 * 56 + 40 + 20)
        assert band_height(1, 100, 0) == pytest.approx(250)

    @pytest.mark.parametrize("position,expected_y", [
        ("top", 0),
        ("center", (1080 - 143) // 2),
        ("bottom", 1080 - 143),
    ])
    def test_band_position(self, position, expected_y):
        """
        Test the band anchor for each position.
        """
        layout = compute_layout("Hello World", 1080, 1080, 54, position)

        assert layout.band_height == 143
        assert layout.band_y == expected_y
        assert layout.lines == ("Hello World",)

    def test_band_is_clamped_to_image(self):
        """
        Test that the band never exceeds the image.
        """
        layout = compute_layout("Hello World", 400, 50, 54, "bottom")

        assert layout.band_y == 0
        assert layout.band_height == 50

    def test_text_lines_inside_band(self):
        """
        Test that every line centre lies inside the band.
        """
        layout = compute_layout("A much longer campaign message that needs wrapping", 400, 600, 30, "center")

        assert len(layout.lines) > 1
        for center in layout.line_centers:
            assert layout.band_y <= center <= layout.band_y + layout.band_height

    def test_logo_reserves_width(self):
        """
        Test that a logo narrows the available text width.
        """
        without_logo = compute_layout("Hello", 1080, 1080, 40, "top", padding=20)
        with_logo = compute_layout("Hello", 1080, 1080, 40, "top", padding=20, logo=(100, 50))

        assert without_logo.chars_per_line == 45
        assert with_logo.chars_per_line == (1080 - 120 - 32 - 20) // 24

        # 1000 - 75 - 40 - 30 = 855 px, 855 / 30 = 28.5
        boundary = compute_layout("x", 1000, 1000, 50, "bottom", padding=30, logo=(75, 75))
        assert boundary.logo_box[2:] == (75, 75)
        assert boundary.chars_per_line == 28

    def test_logo_prefix_and_suffix(self):
        """
        Test logo placement on either side of the text.
        """
        prefix = compute_layout("Hello", 1080, 1080, 40, "top", logo=(100, 50), logo_position="prefix")
        suffix = compute_layout("Hello", 1080, 1080, 40, "top", logo=(100, 50), logo_position="suffix")

        half = prefix.estimated_text_width / 2

        logo_x, logo_y, logo_w, logo_h = prefix.logo_box
        assert (logo_w, logo_h) == (120, 60)
        assert logo_x + logo_w <= prefix.text_x - half

        logo_x, _, logo_w, _ = suffix.logo_box
        assert logo_x >= suffix.text_x + half

    def test_logo_vertically_centred_in_band(self):
        """
        Test that the logo sits in the middle of the band.
        """
        layout = compute_layout("Hello", 1080, 1080, 40, "bottom", logo=(100, 50))

        _, logo_y, _, logo_h = layout.logo_box
        band_middle = layout.band_y + layout.band_height / 2
        assert abs((logo_y + logo_h / 2) - band_middle) <= 1

    def test_wide_logo_stays_inside_image(self):
        """
        Test that a logo wider than the image is shrunk and clamped.
        """
        layout = compute_layout("Hi", 200, 200, 40, "top", padding=20, logo=(1000, 100))

        logo_x, _, logo_w, _ = layout.logo_box
        assert logo_x >= 20
        assert logo_x + logo_w <= 200 - 20

    def test_logo_size_keeps_aspect_ratio(self):
        """
        Test logo scaling.
        """
        assert logo_size(200, 100, 40, 1000) == (120, 60)
        assert logo_size(1000, 100, 40, 160) == (160, 16)
