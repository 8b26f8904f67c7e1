"""Glob to regular expression translation for Service-Component entries."""

# Characters that are literal in a glob but special in a regex
_REGEX_SPECIALS = frozenset("\\^$.{}()+|")


def glob_to_regex(glob: str) -> str:
    """Translate a glob into regex source.

    ``*`` becomes ``.*`` and ``?`` becomes ``.`` (both also match ``/``),
    ``[`` and ``]`` pass through so character classes keep working, and every
    other regex metacharacter is escaped. Wildcards inside a character class
    are kept literally. The result is meant for full-string matching.

    Unbalanced brackets are passed through verbatim, so the returned source
    is not guaranteed to compile.
    """
    regex = []
    in_char_class = False

    for char in glob:
        if char == "*":
            regex.append(char if in_char_class else ".*")
        elif char == "?":
            regex.append(char if in_char_class else ".")
        elif char == "[":
            in_char_class = True
            regex.append(char)
        elif char == "]":
            in_char_class = False
            regex.append(char)
        elif char in _REGEX_SPECIALS:
            regex.append("\\" + char)
        else:
            regex.append(char)

    return "".join(regex)
