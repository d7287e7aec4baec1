_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\0": "\\0",
}


def escape_text(text: str) -> str:
    escaped = []
    for ch in text:
        if ch in _ESCAPES:
            escaped.append(_ESCAPES[ch])
        elif not ch.isprintable():
            escaped.append(f"\\u{{{ord(ch):x}}}")
        else:
            escaped.append(ch)
    return "".join(escaped)


def quote_text(text: str) -> str:
    return f'"{escape_text(text)}"'
