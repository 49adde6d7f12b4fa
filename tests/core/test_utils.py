"""
Tests for utility functions.
"""

import os
import tempfile
import pytest

from adcraft.core.utils import (
    get_file_extension,
    is_valid_image_file,
    load_json_file,
    parse_hex_color,
    sanitize_path_component,
    save_json_file,
)

class TestUtils:
    """
    Tests for the utils module.
    """

    def setup_method(self):
        """
        Set up test environment.
        """
        self.temp_dir = tempfile.TemporaryDirectory()

    def teardown_method(self):
        """
        Clean up test environment.
        """
        self.temp_dir.cleanup()

    def test_parse_hex_color(self):
        """
        Test parsing hex colours.
        """
        assert parse_hex_color("#000000") == (0, 0, 0)
        assert parse_hex_color("#FFFFFF") == (255, 255, 255)
        assert parse_hex_color("#0b3d91") == (11, 61, 145)
        assert parse_hex_color("#fff") == (255, 255, 255)
        assert parse_hex_color("#FF000080") == (255, 0, 0)

        with pytest.raises(ValueError):
            parse_hex_color("#12345")

        with pytest.raises(ValueError):
            parse_hex_color("#GGGGGG")

    def test_save_and_load_json_file(self):
        """
        Test that save_json_file creates missing parent directories.
        """
        path = os.path.join(self.temp_dir.name, "nested", "dir", "data.json")

        save_json_file({"a": 1}, path)

        assert load_json_file(path) == {"a": 1}

    def test_is_valid_image_file(self):
        """
        Test image file detection by extension.
        """
        image_path = os.path.join(self.temp_dir.name, "logo.PNG")
        text_path = os.path.join(self.temp_dir.name, "notes.txt")
        for path in (image_path, text_path):
            with open(path, "w") as f:
                f.write("x")

        assert is_valid_image_file(image_path)
        assert not is_valid_image_file(text_path)
        assert not is_valid_image_file(os.path.join(self.temp_dir.name, "missing.png"))
        assert get_file_extension(image_path) == "png"

    def test_sanitize_path_component(self):
        """
        Test sanitizing storage path components.
        """
        assert sanitize_path_component("summer-2025") == "summer-2025"
        assert sanitize_path_component("a/b:c") == "a_b_c"
        assert sanitize_path_component("  ") == "_"
