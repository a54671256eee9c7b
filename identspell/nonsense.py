"""
Nonsense Filter
===============
Recognizes placeholder words (``abc``, ``xxxx``, ``aabbcc``, ``qwerty``)
that appear in test and sample code. Such words are never reported,
whether or not a dictionary happens to contain them.
"""

__version__ = "1.0.0"

MIN_LENGTH = 3

KEYBOARD_WORDS = frozenset(
    form
    for word in ("xyz", "asdfgh", "qwerty", "qwertz")
    for form in (word, word.capitalize(), word.upper())
)


def is_allowed_nonsensical_word(value: str) -> bool:
    """True if ``value`` is a placeholder that should not be reported."""
    if len(value) < MIN_LENGTH:
        return False

    return (value in KEYBOARD_WORDS
            or is_abc_sequence(value)
            or is_uniform_run(value)
            or is_block_sequence(value))


def is_abc_sequence(value: str) -> bool:
    """``abc``, ``ABCD``, ``Abcde``: consecutive letters starting at a/A."""
    if len(value) < 2:
        return False

    first, second = value[0], value[1]
    if first == 'a' and second == 'b':
        expected = 'c'
    elif first == 'A' and second == 'B':
        expected = 'C'
    elif first == 'A' and second == 'b':
        expected = 'c'
    else:
        return False

    code = ord(expected)
    for ch in value[2:]:
        if ord(ch) != code:
            return False
        code += 1

    return True


def is_uniform_run(value: str) -> bool:
    """``aaa``, ``AAAA``, ``Xxxx``: one letter repeated."""
    if not value or not value[0].isalpha():
        return False

    ch = value[0]
    rest = value[1:]

    if ch.isupper() and rest and rest[0] == ch.lower():
        ch = ch.lower()

    return all(c == ch for c in rest)


def is_block_sequence(value: str) -> bool:
    """
    ``aabbcc``, ``AAABBBCCC``: equal-length blocks of one letter each,
    starting at a/A and advancing by one letter per block.
    """
    first = value[0]
    if first not in ('a', 'A') or len(value) < 6:
        return False

    block = 1
    while block < len(value) and value[block] == first:
        block += 1

    if block < 2 or len(value) % block != 0:
        return False

    for number in range(len(value) // block):
        expected = chr(ord(first) + number)
        if value[number * block:(number + 1) * block] != expected * block:
            return False

    return True
