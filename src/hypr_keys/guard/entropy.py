"""Shannon entropy and the encoded-payload heuristics built on it."""

from __future__ import annotations

import math
import string
from collections import Counter


HEX_ALPHABET = frozenset(string.hexdigits)
BASE64_ALPHABET = frozenset(string.ascii_letters + string.digits + "+/=")

HEX_MIN_RATIO = 0.95
HEX_MIN_ENTROPY = 3.0
BASE64_MIN_RATIO = 0.90
BASE64_MIN_ENTROPY = 4.0


def calculate_entropy(text: str) -> float:
    """Bits per character: ``-sum(p * log2(p))`` over distinct characters."""

    if not text:
        return 0.0

    length = len(text)
    entropy = 0.0
    for count in Counter(text).values():
        probability = count / length
        entropy -= probability * math.log2(probability)
    return entropy


def _alphabet_ratio(text: str, alphabet: frozenset[str]) -> float:
    return sum(1 for ch in text if ch in alphabet) / len(text)


def is_likely_hex(text: str) -> bool:
    if not text:
        return False
    if _alphabet_ratio(text, HEX_ALPHABET) < HEX_MIN_RATIO:
        return False
    return calculate_entropy(text) > HEX_MIN_ENTROPY


def is_likely_base64(text: str) -> bool:
    if not text:
        return False
    if _alphabet_ratio(text, BASE64_ALPHABET) < BASE64_MIN_RATIO:
        return False
    return calculate_entropy(text) > BASE64_MIN_ENTROPY
