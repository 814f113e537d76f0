"""Nesting validation for candidate marker pairs.

Takes the per-type pairs from the pairing resolver and keeps only those that
nest properly and stay within the depth limit. Invalidated markers are not an
error; the span builders render them as literal text.

Rules, applied in one left-to-right walk with a stack of open pairs:

- An opener that arrives while ``max_depth`` pairs are already open is
  invalidated on its own (it is never pushed).
- A closer whose opener is on top of the stack pops it.
- A closer whose opener sits deeper in the stack crosses the pairs above it:
  that pair and every pair opened after it are invalidated.
- A closer whose opener is not on the stack belongs to a pair already
  invalidated and is ignored.

Example:
    >>> tokens = tokenize("**level1 _level2 ~~level3~~_**")
    >>> sorted(resolve_pairs(tokens))  # ** and _ survive, ~~ does not
    [0, 2, 7, 8]

"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from spanmark.config import DEFAULT_MAX_NESTING_DEPTH
from spanmark.parsing.pairing import identify_pairs
from spanmark.tokens import Token
from spanmark.utils.logger import get_logger

logger = get_logger(__name__)


def validate_pairs(
    tokens: Sequence[Token],
    candidate_pairs: Mapping[int, int],
    max_depth: int = DEFAULT_MAX_NESTING_DEPTH,
) -> dict[int, int]:
    """Return the subset of candidate_pairs that nests properly within max_depth.

    Args:
        tokens: Token list the pair indices refer to
        candidate_pairs: Symmetric index map from identify_pairs
        max_depth: Maximum number of formats open at once

    Returns:
        New symmetric map; candidate_pairs is not modified.

    """
    open_stack: list[int] = []
    invalid: set[int] = set()

    for index in range(len(tokens)):
        partner = candidate_pairs.get(index)
        if partner is None:
            continue

        if partner > index:
            if len(open_stack) >= max_depth:
                invalid.add(index)
                invalid.add(partner)
                logger.debug("pair %d-%d exceeds nesting depth %d", index, partner, max_depth)
                continue
            open_stack.append(index)
        elif open_stack and open_stack[-1] == partner:
            open_stack.pop()
        elif partner in open_stack:
            cut = open_stack.index(partner)
            for opener in open_stack[cut:]:
                invalid.add(opener)
                invalid.add(candidate_pairs[opener])
            logger.debug(
                "closer %d crosses %d open pair(s); invalidated",
                index,
                len(open_stack) - cut,
            )
            del open_stack[cut:]

    return {k: v for k, v in candidate_pairs.items() if k not in invalid}


def resolve_pairs(
    tokens: Sequence[Token], max_depth: int = DEFAULT_MAX_NESTING_DEPTH
) -> dict[int, int]:
    """Identify and validate pairs in one call."""
    return validate_pairs(tokens, identify_pairs(tokens), max_depth)


__all__ = ["resolve_pairs", "validate_pairs"]
