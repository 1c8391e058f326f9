"""Naming helpers: path-derived resource keys and identifier casing."""


def find_prefix(words: list[str]) -> str:
    """Return the literal prefix all words share, or "" if there is none.

    Character-wise: stops at the first divergence. Fewer than two words
    never share a prefix.
    """
    if len(words) <= 1 or not words[0]:
        return ""

    prefix = words[0]
    for word in words[1:]:
        i = 0
        limit = min(len(prefix), len(word))
        while i < limit and prefix[i] == word[i]:
            i += 1
        prefix = prefix[:i]
        if not prefix:
            break
    return prefix


def make_key_name(path: str) -> str:
    """Build a CapitalCase key from the non-parameter segments of a path.

    /v3/image-boards/{id} -> V3ImageBoards
    """
    result = []
    for segment in path.split("/"):
        if segment.startswith("{"):
            continue
        capitalize_next = True
        for c in segment:
            if not c.isalnum():
                capitalize_next = True
                continue
            if capitalize_next:
                c = c.upper()
                capitalize_next = False
            result.append(c)
    return "".join(result)


def derive_key(path: str, prefix: str) -> str:
    """Key for a path with the shared prefix stripped.

    Falls back to the whole path when stripping leaves nothing to name.
    """
    key = make_key_name(path[len(prefix):])
    if not key:
        key = make_key_name(path)
    return key


def to_title_name(s: str) -> str:
    """Convert snake_case or kebab-case to TitleCase. Digits are kept."""
    result = []
    upper_next = True
    for c in s:
        if not c.isalpha():
            upper_next = True
            if c.isdigit():
                result.append(c)
            continue
        if upper_next:
            result.append(c.upper())
            upper_next = False
        else:
            result.append(c)
    return "".join(result)


def to_hcl_name(s: str) -> str:
    """Convert TitleCase or camelCase to snake_case.

    Runs of capitals stay together: APIHowdy -> api_howdy.
    """
    result = []
    prevent_underscore = True

    for index, c in enumerate(s):
        is_alnum = c.isalpha() or c.isdigit()
        is_upper = c.isupper()

        if index > 0 and (is_upper or not is_alnum):
            if not prevent_underscore:
                result.append("_")
                prevent_underscore = True

        if is_alnum:
            # "HIthere": the capital before a lowercase starts a new word
            lower_follows_next_upper = (
                index < len(s) - 2 and s[index + 2].isalpha() and not s[index + 2].isupper()
            )
            result.append(c.lower())
            prevent_underscore = False
            if is_upper and not lower_follows_next_upper:
                prevent_underscore = True

    return "".join(result)


def valid_hcl_identifier(s: str) -> bool:
    """Letters, digits, underscores and dashes; must not start with a digit."""
    if not s:
        return False
    if s[0].isdigit():
        return False
    return all(c.isalpha() or c.isdigit() or c in "_-" for c in s)
