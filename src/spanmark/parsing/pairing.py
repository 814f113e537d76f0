"""Pairing of format markers into candidate open/close pairs.

Markers pair strictly within their own type: each MarkerType keeps a stack,
and a marker either opens (empty stack) or closes the most recent opener of
the same type. Interleaving across types (``**a *b** c*``) is not judged
here; the nesting validator removes crossing pairs afterwards.

Example:
    >>> tokens = tokenize("**bold**")
    >>> identify_pairs(tokens)
    {0: 2, 2: 0}

"""

from __future__ import annotations

from collections.abc import Sequence

from spanmark.tokens import FormatMarkerToken, MarkerType, Token


def identify_pairs(tokens: Sequence[Token]) -> dict[int, int]:
    """Pair same-type markers, last-opened-first-closed.

    Returns a symmetric map: for every pair both ``pairs[open] == close`` and
    ``pairs[close] == open`` hold. A marker left without a partner (odd count)
    does not appear.

    """
    pairs: dict[int, int] = {}
    open_stacks: dict[MarkerType, list[int]] = {}

    for index, token in enumerate(tokens):
        if not isinstance(token, FormatMarkerToken):
            continue
        stack = open_stacks.setdefault(token.marker_type, [])
        if stack:
            opener = stack.pop()
            pairs[opener] = index
            pairs[index] = opener
        else:
            stack.append(index)

    return pairs


__all__ = ["identify_pairs"]
