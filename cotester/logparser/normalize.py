"""Clean up raw run log lines before they are parsed.

The backend writes its logs as UTF-8, but somewhere along the way they are sometimes decoded
with a Western European charset, so the icons used by the test hooks arrive as sequences like
"âœ“" instead of "✓". Those sequences are mapped back to the intended characters using a fixed
table; anything not in the table is left alone.
"""

import re


# Characters the test hooks and backend messages are known to emit
KNOWN_SYMBOLS = (
    '🌐✓✔✅✗✘❌🎥📸📍▶➡⚠🚀⚙⏱🧵💻🔧🖥'
    '\ufe0f'  # emoji variation selector that follows some of the above
    'çğıöşüÇĞİÖŞÜ'  # Turkish letters in the backend's messages
)

# capture ESC-introduced ANSI X3.64 escape sequences added when logging to a terminal
# 8-bit C1 controls are deliberately not matched since they show up in mis-decoded text
STRIP_ANSI_RE = re.compile(
    '\x1b[ -/]+[0-~]|'               # nF escape
    '\x1b\\[[ -?]*[@-~]|'            # CSI ... Cmd
    '\x1b\\].*?(?:\x1b\\\\|\x07)|'   # OSC ... (ST|BEL)
    '\x1b[P^_].*?\x1b\\\\|'          # (DCS|PM|APC) ... ST
    '\x1b.'
)


def windows1252_char(byte: int) -> str:
    """Decode a single byte the way a browser decodes windows-1252.

    The five bytes undefined in cp1252 come through as the C1 control of the same value.
    """
    try:
        return bytes((byte,)).decode('cp1252')
    except UnicodeDecodeError:
        return chr(byte)


def mis_decodings(symbol: str) -> set[str]:
    """Return the ways the UTF-8 encoding of symbol shows up when decoded with the wrong charset."""
    encoded = symbol.encode('utf-8')
    return {
        ''.join(windows1252_char(b) for b in encoded),
        encoded.decode('latin-1'),
    }


def build_mojibake_table(symbols: str) -> dict[str, str]:
    """Map each garbled form of each symbol back to the symbol."""
    return {garbled: symbol for symbol in symbols for garbled in mis_decodings(symbol)}


MOJIBAKE = build_mojibake_table(KNOWN_SYMBOLS)

# Longest first so that a 4-byte emoji wins over any shorter sequence sharing its prefix
MOJIBAKE_RE = re.compile('|'.join(
    re.escape(garbled) for garbled in sorted(MOJIBAKE, key=len, reverse=True)))


def strip_ansi(s: str) -> str:
    """Strip ANSI X3.64 escape sequences from string."""
    return STRIP_ANSI_RE.sub('', s)


def repair_mojibake(s: str) -> str:
    """Replace known mis-decoded character sequences with the intended characters."""
    return MOJIBAKE_RE.sub(lambda m: MOJIBAKE[m.group(0)], s)


def normalize_line(line: str) -> str:
    """Return the cleaned-up version of a raw log line.

    Normalizing an already-normalized line returns it unchanged.
    """
    return repair_mojibake(strip_ansi(line)).strip()
