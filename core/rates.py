"""Typing rate calculation utilities."""


def calculate_keys_per_minute(key_count: int, duration_sec: float) -> float:
    """Calculate keys per minute.

    Args:
        key_count: Number of keystrokes
        duration_sec: Duration in seconds

    Returns:
        Keys per minute, or 0.0 if duration is not positive
    """
    if duration_sec <= 0:
        return 0.0

    return key_count / (duration_sec / 60.0)


def calculate_wpm(letter_count: int, duration_sec: float,
                  average_word_length: float = 5.0) -> float:
    """Calculate words per minute from letter keystrokes.

    Args:
        letter_count: Number of alphabetic keystrokes
        duration_sec: Duration in seconds
        average_word_length: Letters per word (default: 5)

    Returns:
        WPM (words per minute), or 0.0 if duration is not positive
    """
    if duration_sec <= 0 or average_word_length <= 0:
        return 0.0

    words = letter_count / average_word_length
    return words / (duration_sec / 60.0)
