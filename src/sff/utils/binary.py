"""Binary detection and text decoding for candidate documents."""

from pathlib import Path

from sff.errors import FileDecodeError

# Control bytes that do not appear in ordinary text (tab, LF, FF, CR allowed)
_CONTROL_BYTES = frozenset(range(0, 32)) - {9, 10, 12, 13} | {127}


def is_binary_content(content: bytes, sample_size: int = 8192) -> bool:
    """Detect if content is binary by checking for null and control bytes.

    Only ASCII control bytes count against the content, so UTF-8 text in
    any script is not mistaken for binary.

    Args:
        content: Raw file content
        sample_size: Number of bytes to sample from the start

    Returns:
        True if content appears to be binary
    """
    if not content:
        return False

    sample = content[:sample_size]

    # Null bytes are a strong binary indicator
    if b"\x00" in sample:
        return True

    control = sum(1 for byte in sample if byte in _CONTROL_BYTES)

    # If more than 30% control bytes, treat as binary
    return (control / len(sample)) > 0.30


def decode_text(path: Path, content: bytes) -> str:
    """Decode file content as UTF-8 text.

    Raises:
        FileDecodeError: if the content looks binary or is not valid UTF-8
    """
    if is_binary_content(content):
        raise FileDecodeError(path, "binary content")
    try:
        # utf-8-sig drops a leading byte order mark
        return content.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise FileDecodeError(path, f"not valid UTF-8 ({exc.reason})") from exc
