"""
Bytewords encoding and decoding, including the checksum and all three styles (standard, uri, minimal).
See https://github.com/BlockchainCommons/Research/blob/master/papers/bcr-2020-012-bytewords.md
"""

from __future__ import annotations

import logging
import threading
import zlib

from typing import Iterable, NamedTuple, Sequence

from .types import Style


logger = logging.getLogger(__name__)

CHECKSUM_LENGTH = 4
MIN_DECODED_LENGTH = 1 + CHECKSUM_LENGTH

ALPHABET_SIZE = 26

# Word length and separator for each style.
STYLE_FORMATS: dict[str, tuple[int, str]] = {
    "standard": (4, " "),
    "uri": (4, "-"),
    "minimal": (2, ""),
}


class DecodeError(ValueError):
    pass


class InvalidWordError(DecodeError):
    def __init__(self, word: str, position: int):
        super().__init__(f"Invalid byteword {word!r} at position {position}.")
        self.word = word
        self.position = position


class TooShortError(DecodeError):
    def __init__(self, length: int):
        super().__init__(f"Decoded {length} bytes, at least {MIN_DECODED_LENGTH} are required.")
        self.length = length


class ChecksumMismatchError(DecodeError):
    def __init__(self, expected: bytes, received: bytes):
        super().__init__(f"Checksum mismatch (expected {expected.hex()}, received {received.hex()}).")
        self.expected = expected
        self.received = received


# fmt: off
WORDLIST = (
    "able", "acid", "also", "apex", "aqua", "arch", "atom", "aunt",
    "away", "axis", "back", "bald", "barn", "belt", "beta", "bias",
    "blue", "body", "brag", "brew", "bulb", "buzz", "calm", "cash",
    "cats", "chef", "city", "claw", "code", "cola", "cook", "cost",
    "crux", "curl", "cusp", "cyan", "dark", "data", "days", "deli",
    "dice", "diet", "door", "down", "draw", "drop", "drum", "dull",
    "duty", "each", "easy", "echo", "edge", "epic", "even", "exam",
    "exit", "eyes", "fact", "fair", "fern", "figs", "film", "fish",
    "fizz", "flap", "flew", "flux", "foxy", "free", "frog", "fuel",
    "fund", "gala", "game", "gear", "gems", "gift", "girl", "glow",
    "good", "gray", "grim", "guru", "gush", "gyro", "half", "hang",
    "hard", "hawk", "heat", "help", "high", "hill", "holy", "hope",
    "horn", "huts", "iced", "idea", "idle", "inch", "inky", "into",
    "iris", "iron", "item", "jade", "jazz", "join", "jolt", "jowl",
    "judo", "jugs", "jump", "junk", "jury", "keep", "keno", "kept",
    "keys", "kick", "kiln", "king", "kite", "kiwi", "knob", "lamb",
    "lava", "lazy", "leaf", "legs", "liar", "list", "limp", "lion",
    "logo", "loud", "love", "luau", "luck", "lung", "main", "many",
    "math", "maze", "memo", "menu", "meow", "mild", "mint", "miss",
    "monk", "nail", "navy", "need", "news", "next", "noon", "note",
    "numb", "obey", "oboe", "omit", "onyx", "open", "oval", "owls",
    "paid", "part", "peck", "play", "plus", "poem", "pool", "pose",
    "puff", "puma", "purr", "quad", "quiz", "race", "ramp", "real",
    "redo", "rich", "road", "rock", "roof", "ruby", "ruin", "runs",
    "rust", "safe", "saga", "scar", "sets", "silk", "skew", "slot",
    "soap", "solo", "song", "stub", "surf", "swan", "taco", "task",
    "taxi", "tent", "tied", "time", "tiny", "toil", "tomb", "toys",
    "trip", "tuna", "twin", "ugly", "undo", "unit", "urge", "user",
    "vast", "very", "veto", "vial", "vibe", "view", "visa", "void",
    "vows", "wall", "wand", "warm", "wasp", "wave", "waxy", "webs",
    "what", "when", "whiz", "wolf", "work", "yank", "yawn", "yell",
    "yoga", "yurt", "zaps", "zest", "zinc", "zone", "zoom", "zero",
)
# fmt: on


def _style_format(style: Style) -> tuple[int, str]:
    try:
        return STYLE_FORMATS[style]
    except KeyError:
        raise ValueError(f"Invalid style {style!r}.") from None


def word_for(byte: int) -> str:
    """Returns the four-letter byteword for the given byte value."""
    if not 0 <= byte <= 255:
        raise ValueError(f"Byte value {byte} out of range.")
    return WORDLIST[byte]


def minimal_word_for(byte: int) -> str:
    """Returns the two-letter minimal form, i.e., the first and the last letter of the byteword."""
    word = word_for(byte)
    return word[0] + word[3]


class LookupTable(NamedTuple):
    """Reverse index from the first and last letter of a word to its byte value.

    Cell `x * 26 + y` holds the byte value of the word starting with the x-th and ending with the y-th letter of the
    alphabet, or None if there is no such word.
    """

    words: tuple[str, ...]
    cells: tuple[int | None, ...]

    def get(self, first: str, last: str) -> int | None:
        x = ord(first) - ord("a")
        y = ord(last) - ord("a")
        if not (0 <= x < ALPHABET_SIZE and 0 <= y < ALPHABET_SIZE):
            return None
        return self.cells[x * ALPHABET_SIZE + y]


def build_lookup_table(wordlist: Sequence[str] = WORDLIST) -> LookupTable:
    """Derives the lookup table for a word list. Raises a ValueError if the word list is unsuitable, i.e., it does not
    consist of 256 lowercase four-letter words with pairwise distinct first/last letter combinations.
    """
    if len(wordlist) != 256:
        raise ValueError(f"Word list must contain 256 words, got {len(wordlist)}.")

    cells: list[int | None] = [None] * (ALPHABET_SIZE * ALPHABET_SIZE)
    for index, word in enumerate(wordlist):
        if len(word) != 4 or not all("a" <= c <= "z" for c in word):
            raise ValueError(f"Invalid word {word!r} at index {index}.")
        offset = (ord(word[0]) - ord("a")) * ALPHABET_SIZE + (ord(word[3]) - ord("a"))
        if cells[offset] is not None:
            raise ValueError(f"Words {wordlist[cells[offset]]!r} and {word!r} share first and last letters.")
        cells[offset] = index

    return LookupTable(tuple(wordlist), tuple(cells))


_lookup_table: LookupTable | None = None
_lookup_table_lock = threading.Lock()


def lookup_table() -> LookupTable:
    """Returns the lookup table for the builtin word list. It is built once, on first use."""
    global _lookup_table
    if _lookup_table is None:
        with _lookup_table_lock:
            if _lookup_table is None:
                _lookup_table = build_lookup_table(WORDLIST)
                logger.debug("Built bytewords lookup table.")
    return _lookup_table


def decode_word(text: str, word_length: int, table: LookupTable | None = None) -> int | None:
    """Resolves a single four-letter word or two-letter minimal word (case-insensitive) to its byte value.
    Returns None if the text is not a valid word.
    """
    if word_length not in (2, 4):
        raise ValueError(f"Invalid word length {word_length}.")
    if len(text) != word_length or not text.isascii():
        return None

    if table is None:
        table = lookup_table()
    word = text.lower()
    value = table.get(word[0], word[-1])
    if value is None:
        return None

    # Words sharing the first and last letter with a byteword are only accepted if they are that byteword.
    if word_length == 4 and word[1:3] != table.words[value][1:3]:
        return None

    return value


def checksum(data: bytes) -> bytes:
    """Computes the CRC-32 checksum of the data, in network byte order."""
    return zlib.crc32(data).to_bytes(CHECKSUM_LENGTH, "big")


def encode_words(style: Style, data: bytes) -> list[str]:
    """Converts the data and its checksum into a list of words, one per byte."""
    word_length, _ = _style_format(style)
    to_word = word_for if word_length == 4 else minimal_word_for
    return [to_word(byte) for byte in bytes(data) + checksum(data)]


def encode(style: Style, data: bytes) -> str:
    """Converts a bytes object into a bytewords phrase of the given style. The checksum is appended to the data."""
    _, separator = _style_format(style)
    return separator.join(encode_words(style, data))


def _scan(text: str, word_length: int, separator: str, strict: bool) -> Iterable[int]:
    table = lookup_table()
    position = 0
    end = len(text)
    while position < end:
        chunk = text[position : position + word_length]
        value = decode_word(chunk, word_length, table)
        if value is None:
            raise InvalidWordError(chunk, position)
        yield value
        position += word_length

        if not separator or position == end:
            continue
        if text[position] == separator:
            position += 1
            if strict and position == end:
                raise InvalidWordError(separator, position - 1)
        elif strict:
            raise InvalidWordError(text[position : position + word_length], position)


def decode(style: Style, phrase: str, *, strict: bool = False) -> bytes:
    """Converts a bytewords phrase of the given style into a bytes object and verifies its checksum.

    A single separator is consumed after each word if present. With `strict` set, the separators are required to be
    exactly as produced by `encode()`.

    Raises a DecodeError (a ValueError) if the phrase contains invalid words, is too short, or the checksum does not
    match.
    """
    word_length, separator = _style_format(style)
    try:
        buffer = bytes(_scan(phrase, word_length, separator, strict))
        if len(buffer) < MIN_DECODED_LENGTH:
            raise TooShortError(len(buffer))

        body, received = buffer[:-CHECKSUM_LENGTH], buffer[-CHECKSUM_LENGTH:]
        expected = checksum(body)
        if expected != received:
            raise ChecksumMismatchError(expected, received)

    except DecodeError as e:
        logger.debug(f"Failed to decode {style} bytewords: {e}")
        raise

    return body
