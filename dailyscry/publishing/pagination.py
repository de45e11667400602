"""
Budgeted Paginator.

Splits a display string into chunks that fit a channel's character limit
once the fixed trailer content has been reserved.

INVARIANTS:
- Every chunk is at most `limit - reserved` characters long
- Every chunk but the last ends with ELLIPSIS; the ellipsis is not taken
  from the source text
- Characters are counted per code point, so ELLIPSIS costs exactly one
- Output depends only on the arguments
"""

from collections.abc import Sequence

from dailyscry.models.failure import BudgetExhaustedError

ELLIPSIS = "…"

# A literal string reserves its length, an int reserves itself
Reservation = str | int


def reserved_length(reservations: Sequence[Reservation]) -> int:
    """
    Sum the characters reserved by trailer content.

    Args:
        reservations: Literal strings and raw character counts

    Returns:
        Total reserved characters

    Raises:
        ValueError: If a raw count is negative
    """
    total = 0
    for reservation in reservations:
        if isinstance(reservation, str):
            total += len(reservation)
            continue
        if reservation < 0:
            raise ValueError(f"Reserved character count must not be negative: {reservation}")
        total += reservation
    return total


def paginate(
    text: str,
    limit: int,
    reservations: Sequence[Reservation] = (),
) -> list[str]:
    """
    Split text into chunks that fit the remaining character budget.

    Example:
        >>> paginate("0123456789", 5)
        ['0123…', '4567…', '89']

    Args:
        text: The display string to split
        limit: The channel's character limit
        reservations: Trailer content appended to every chunk; strings
            reserve their length, ints reserve that many characters

    Returns:
        The chunks in order; empty for empty text

    Raises:
        BudgetExhaustedError: If the reservations leave no room for text
    """
    reserved = reserved_length(reservations)
    available = limit - reserved
    if available <= 0:
        raise BudgetExhaustedError(limit=limit, reserved=reserved)

    if not text:
        return []

    # Splitting needs room for at least one source character next to the ellipsis
    if len(text) > available and available < 2:
        raise BudgetExhaustedError(limit=limit, reserved=reserved)

    step = available - 1
    chunks: list[str] = []
    remaining = text
    while len(remaining) > available:
        chunks.append(remaining[:step] + ELLIPSIS)
        remaining = remaining[step:]
    chunks.append(remaining)
    return chunks
