"""Utility functions for sff."""

from sff.utils.binary import decode_text, is_binary_content

__all__ = ["decode_text", "is_binary_content"]
