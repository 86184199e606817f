"""Windows virtual-key code to name mappings for BongoStats."""

VK_CODE_TO_NAME = {
    8: 'BACKSPACE', 9: 'TAB', 13: 'ENTER', 16: 'SHIFT', 17: 'CTRL',
    18: 'ALT', 19: 'PAUSE', 20: 'CAPS_LOCK', 27: 'ESC', 32: 'SPACE',
    33: 'PAGE_UP', 34: 'PAGE_DOWN', 35: 'END', 36: 'HOME',
    37: 'LEFT_ARROW', 38: 'UP_ARROW', 39: 'RIGHT_ARROW', 40: 'DOWN_ARROW',
    44: 'PRINT_SCREEN', 45: 'INSERT', 46: 'DELETE',
    91: 'LEFT_WIN', 92: 'RIGHT_WIN', 93: 'APPS',
    106: 'NUMPAD_*', 107: 'NUMPAD_+', 109: 'NUMPAD_-', 110: 'NUMPAD_.',
    111: 'NUMPAD_/',
    144: 'NUM_LOCK', 145: 'SCROLL_LOCK',
    160: 'LEFT_SHIFT', 161: 'RIGHT_SHIFT', 162: 'LEFT_CTRL',
    163: 'RIGHT_CTRL', 164: 'LEFT_ALT', 165: 'RIGHT_ALT',
    186: ';', 187: '=', 188: ',', 189: '-', 190: '.', 191: '/', 192: '`',
    219: '[', 220: '\\', 221: ']', 222: "'",
}

# Letters A-Z and digits 0-9 share their ASCII codes
VK_CODE_TO_NAME.update({code: chr(code) for code in range(ord('A'), ord('Z') + 1)})
VK_CODE_TO_NAME.update({code: chr(code) for code in range(ord('0'), ord('9') + 1)})
VK_CODE_TO_NAME.update({96 + n: f'NUMPAD{n}' for n in range(10)})
VK_CODE_TO_NAME.update({111 + n: f'F{n}' for n in range(1, 25)})


def get_key_name(keycode: int) -> str:
    """Get key name for a virtual-key code.

    Args:
        keycode: Windows virtual-key code

    Returns:
        Human-readable key name or 'KEY_<code>' if not found
    """
    return VK_CODE_TO_NAME.get(keycode, f'KEY_{keycode}')


def is_letter_key(key_name: str) -> bool:
    """Check if a key name is a single alphabetic character."""
    return len(key_name) == 1 and key_name.isalpha()


def is_letter_keycode(keycode: int) -> bool:
    """Check if a virtual-key code maps to a letter key (A-Z)."""
    return is_letter_key(get_key_name(keycode))
