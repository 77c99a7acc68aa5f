"""
Order keys - fractional indexing over a base-62 alphabet.

A key is a non-empty string of digits from DIGITS. Keys compare as plain
strings, so a new key can always be generated between two neighbours without
touching any other row. Generated keys never end in the smallest digit, which
keeps every gap subdividable.
"""

DIGITS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
BASE = len(DIGITS)
ZERO = DIGITS[0]
INITIAL_KEY = DIGITS[BASE // 2]

_INDEX = {digit: i for i, digit in enumerate(DIGITS)}


def _validate(key: str) -> None:
    if not key:
        raise ValueError("Order key must not be empty")
    bad = [c for c in key if c not in _INDEX]
    if bad:
        raise ValueError(f"Invalid order key {key!r}: unexpected characters {''.join(bad)!r}")


def _midpoint(lower: str, upper: str | None) -> str:
    """
    Digit-wise midpoint of lower < upper.

    `lower` may be empty (negative infinity); `upper` None means positive
    infinity. Missing digits of `lower` read as ZERO. Iterative, so key
    length is bounded only by memory.
    """
    digits = []
    while True:
        if upper is not None:
            n = 0
            while n < len(upper) and (lower[n] if n < len(lower) else ZERO) == upper[n]:
                n += 1
            if n == len(upper):
                raise ValueError(f"No key exists between {lower!r} and {upper!r}")
            digits.append(upper[:n])
            lower, upper = lower[n:], upper[n:]

        lo = _INDEX[lower[0]] if lower else 0
        hi = _INDEX[upper[0]] if upper is not None else BASE

        if hi - lo > 1:
            digits.append(DIGITS[(lo + hi) // 2])
            return "".join(digits)

        # Adjacent digits: use the upper digit alone if upper continues past it,
        # otherwise keep the lower digit and go one level deeper.
        if upper is not None and len(upper) > 1:
            digits.append(upper[0])
            return "".join(digits)
        digits.append(DIGITS[lo])
        lower, upper = lower[1:], None


def key_after(key: str | None) -> str:
    """Key sorting strictly after `key`, or INITIAL_KEY for the first item ever."""
    if key is None:
        return INITIAL_KEY
    _validate(key)
    return _midpoint(key, None)


def key_before(key: str | None) -> str:
    """
    Key sorting strictly before `key`, or INITIAL_KEY when there is nothing to precede.

    Raises ValueError when `key` is all ZERO digits ("0", "00", ...): only
    keys ending in ZERO could sort before it, and those are never generated.
    """
    if key is None:
        return INITIAL_KEY
    _validate(key)
    return _midpoint("", key)


def key_between(lower: str, upper: str) -> str:
    """Key sorting strictly between `lower` and `upper`. Requires lower < upper."""
    _validate(lower)
    _validate(upper)
    if lower >= upper:
        raise ValueError(f"Order keys out of order: {lower!r} >= {upper!r}")
    return _midpoint(lower, upper)


def _open_between(lower: str | None, upper: str | None) -> str:
    if lower is None:
        return key_before(upper)
    if upper is None:
        return key_after(lower)
    return key_between(lower, upper)


def keys_between(lower: str | None, upper: str | None, n: int) -> list[str]:
    """
    Generate n ascending keys strictly inside (lower, upper).

    None bounds are open. Keys are placed by recursive bisection so they stay
    as short as the interval allows.
    """
    if n <= 0:
        return []
    middle = _open_between(lower, upper)
    if n == 1:
        return [middle]
    left = n // 2
    return keys_between(lower, middle, left) + [middle] + keys_between(middle, upper, n - left - 1)


def key_for_index(sorted_keys: list[str], index: int) -> str:
    """
    Key that lands at `index` when inserted into `sorted_keys`.

    >>> key_for_index([], 0)
    'V'
    >>> key_for_index(["g", "t"], 1)
    'm'
    """
    if not sorted_keys:
        return key_after(None)
    if index <= 0:
        return key_before(sorted_keys[0])
    if index >= len(sorted_keys):
        return key_after(sorted_keys[-1])
    return key_between(sorted_keys[index - 1], sorted_keys[index])
