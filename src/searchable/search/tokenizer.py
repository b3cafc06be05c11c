"""Split search text into words."""


def tokenize(raw: str) -> list[str]:
    """Lower-case the text and split it on single spaces.

    Nothing is trimmed or de-duplicated, so consecutive spaces yield empty
    words and ``tokenize("")`` is ``[""]``.
    """
    return raw.lower().split(" ")
