# agent/formatting.py

import re

# Three or more newlines, counting whitespace-only lines between them.
_EXCESS_NEWLINES = re.compile(r"\n(?:[ \t]*\n){2,}")

# Empty emphasis pairs left by the model, e.g. "** **Bold**" or "word * *text*".
# A marker glued to a word is the close of a real span ("**Tasks** **Reminders**"),
# and a "*" opening a line is a bullet, so neither starts a match.
_SPLIT_STRONG = re.compile(r"(?<!\S)\*\*[ \t]+\*\*")
_SPLIT_EMPHASIS = re.compile(r"([^\s*][ \t]+)\*[ \t]+\*(?!\*)")
_REPEATED_STRONG = re.compile(r"\*{4,}")

# Only colons that already carry trailing spaces are touched, so URLs,
# clock times and "**Label:**" survive.
_COLON_SPACING = re.compile(r"(?<=\S)[ \t]*:[ \t]+(?=\S)")
# "Priority :high". Digits, emoticons and ":shortcodes:" are left alone.
_COLON_GLUED = re.compile(r"(?<=[\w*)])[ \t]+:(?=[^\W\d][^\s:]*(?:\s|$))")

_LIST_MARKER = r"[ \t]*(?:[-*+•]|\d+\.)[ \t]"

_HEADER_WITHOUT_GAP = re.compile(r"^(#{1,6}[ \t][^\n]*)\n(?=[ \t]*[^\s])", re.MULTILINE)
_LIST_ITEM_WITHOUT_GAP = re.compile(
    rf"^({_LIST_MARKER}[^\n]*)\n(?!{_LIST_MARKER})(?=[ \t]*[^\s])",
    re.MULTILINE,
)

# Enough for any input: no rule undoes another, so the text settles in two
# or three passes.
_MAX_PASSES = 10


def _clean_once(text: str) -> str:
    text = _EXCESS_NEWLINES.sub("\n\n", text)
    text = _SPLIT_STRONG.sub("**", text)
    text = _SPLIT_EMPHASIS.sub(r"\1*", text)
    text = _REPEATED_STRONG.sub("**", text)
    text = _COLON_GLUED.sub(": ", text)
    text = _COLON_SPACING.sub(": ", text)
    text = _HEADER_WITHOUT_GAP.sub(r"\1\n\n", text)
    text = _LIST_ITEM_WITHOUT_GAP.sub(r"\1\n\n", text)
    return text.strip()


def clean_response_formatting(text: str) -> str:
    """
    Tidies whitespace and markdown artifacts in LLM output.

    Only spacing and repeated delimiters are changed; the words are left
    alone. The rules are applied until the text stops changing, so the
    function is idempotent.
    """
    if not text:
        return ""
    cleaned = text
    for _ in range(_MAX_PASSES):
        next_pass = _clean_once(cleaned)
        if next_pass == cleaned:
            break
        cleaned = next_pass
    return cleaned
