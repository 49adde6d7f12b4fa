"""
Common utility functions for the adcraft package.
"""

import os
import json
import time
from typing import Dict, Any, Tuple

def current_millis() -> int:
    """Milliseconds since the epoch."""
    return int(time.time() * 1000)

def load_json_file(file_path: str) -> Dict[str, Any]:
    """
    Load a JSON file.

    Raises:
        FileNotFoundError: If file does not exist
        json.JSONDecodeError: If file is not valid JSON
    """
    with open(file_path, 'r') as f:
        return json.load(f)

def save_json_file(data: Dict[str, Any], file_path: str, indent: int = 2) -> None:
    """
    Save data to a JSON file, creating the parent directory if needed.

    Args:
        data (Dict[str, Any]): Data to save
        file_path (str): Path to save JSON file
        indent (int, optional): JSON indentation level
    """
    parent = os.path.dirname(file_path)
    if parent:
        os.makedirs(parent, exist_ok=True)

    with open(file_path, 'w') as f:
        json.dump(data, f, indent=indent)

def get_file_extension(file_path: str) -> str:
    """
    Get the file extension from a file path, lowercased and without the dot.
    """
    return os.path.splitext(file_path)[1][1:].lower()

def is_valid_image_file(file_path: str) -> bool:
    """
    Check if a file exists and has an image extension.

    Args:
        file_path (str): Path to image file

    Returns:
        bool: True if file is a valid image, False otherwise
    """
    if not os.path.isfile(file_path):
        return False

    valid_extensions = ['jpg', 'jpeg', 'png', 'gif', 'bmp', 'tiff', 'webp']
    return get_file_extension(file_path) in valid_extensions

def parse_hex_color(color: str) -> Tuple[int, int, int]:
    """
    Parse a ``#RRGGBB`` (or ``#RGB``) colour string into an RGB tuple.

    Raises:
        ValueError: If the colour is not a valid hex colour
    """
    value = color.strip().lstrip('#')
    if len(value) == 3:
        value = ''.join(c * 2 for c in value)
    if len(value) not in (6, 8):
        raise ValueError(f"Invalid hex color: {color}")

    return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))

def sanitize_path_component(component: str) -> str:
    """
    Replace characters that are unsafe in a storage path component.
    """
    invalid_chars = '<>:"/\\|?*'
    for char in invalid_chars:
        component = component.replace(char, '_')

    return component.strip() or "_"
