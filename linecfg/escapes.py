r"""
Backslash escapes used inside keys and values.

Recognized sequences:
    \\   backslash
    \0   NUL
    \t   tab
    \n   line feed
    \r   carriage return
    \_   space (keeps leading/trailing spaces and spaces inside keys)

Any other escaped character stands for itself, so \#, \: and \= can be
used to keep those characters from being read as syntax.
"""

WHITESPACE = " \t\f\v"
SEPARATORS = ":="

_DECODE = {
    "\\": "\\",
    "0": "\0",
    "t": "\t",
    "n": "\n",
    "r": "\r",
    "_": " ",
}

_ENCODE = {
    "\\": "\\\\",
    "\0": "\\0",
    "\t": "\\t",
    "\n": "\\n",
    "\r": "\\r",
}


def unescape(text: str) -> str:
    """Decode backslash escapes. A lone trailing backslash is kept."""
    if "\\" not in text:
        return text

    out = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == "\\" and i + 1 < len(text):
            nxt = text[i + 1]
            out.append(_DECODE.get(nxt, nxt))
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def escape_value(text: str, comment_marker: str = "#") -> str:
    """Escape a value so the parser reads back exactly the same text."""
    lead = len(text) - len(text.lstrip(WHITESPACE))
    trail = len(text.rstrip(WHITESPACE))

    out = []
    for i, ch in enumerate(text):
        if ch in _ENCODE:
            out.append(_ENCODE[ch])
        elif ch in WHITESPACE and (i < lead or i >= trail):
            out.append("\\_" if ch == " " else "\\" + ch)
        elif i == 0 and ch in SEPARATORS:
            out.append("\\" + ch)
        elif (text.startswith(comment_marker, i)
                and (i == 0 or text[i - 1] in WHITESPACE)):
            out.append("\\" + ch)
        else:
            out.append(ch)
    return "".join(out)


def escape_key(text: str, comment_marker: str = "#") -> str:
    """Escape a key; spaces and separator characters are always escaped."""
    out = []
    for i, ch in enumerate(text):
        if ch in _ENCODE:
            out.append(_ENCODE[ch])
        elif ch == " ":
            out.append("\\_")
        elif ch in SEPARATORS or ch in "\f\v":
            out.append("\\" + ch)
        elif i == 0 and text.startswith(comment_marker):
            out.append("\\" + ch)
        else:
            out.append(ch)
    return "".join(out)
