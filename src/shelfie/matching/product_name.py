# ABOUTME: Reduces noisy product titles from web search results to one clean product name.
# ABOUTME: Frequency-weighted segment scoring plus casing restoration from the raw titles.

import re
from collections import Counter

from shelfie.matching.similarity import similarity_score

# Segments shorter than this are never scored.
_MIN_SEGMENT_LENGTH = 5
# Word sub-sequences must be longer than this to become segments.
_MIN_SUBSEGMENT_LENGTH = 5
# A segment must score strictly above this to beat the frequent-words fallback.
SEGMENT_SCORE_THRESHOLD = 0.0
_FALLBACK_WORD_COUNT = 4

_WHITESPACE_RE = re.compile(r"\s+")
_SEGMENT_SEPARATOR_RE = re.compile(r"[-–—:()]")
_CASING_SPLIT_RE = re.compile(r"[\s\-():]+")

# Stay lower-case unless they open the name.
_MINOR_WORDS = frozenset(
    {
        "a",
        "an",
        "the",
        "and",
        "but",
        "or",
        "for",
        "nor",
        "on",
        "at",
        "to",
        "from",
        "by",
        "de",
        "la",
        "le",
        "au",
    }
)

# Retail listing boilerplate that search result titles tend to carry.
_PARENTHESIZED_RE = re.compile(r"\(.*?\)")
_SITE_SUFFIX_RE = re.compile(r"\s*\|.*$")
_PROMO_RE = re.compile(
    r"\b(au meilleur prix|meilleur prix|neuf|occasion|prix choc|pas cher|offre spéciale"
    r"|nouveauté|remise|promotion|promo|livraison gratuite|top vente|en stock"
    r"|expédié rapidement|100% original|nouveau modèle)\b",
    re.IGNORECASE,
)


def _normalize_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def clean_listing_title(title: str) -> str:
    """Strip listing noise from a search result title.

    Removes parenthesized asides, a trailing ``| Site name`` suffix and common
    promotional phrases, then collapses whitespace.
    """
    cleaned = _PARENTHESIZED_RE.sub("", title)
    cleaned = _PROMO_RE.sub("", cleaned)
    cleaned = _SITE_SUFFIX_RE.sub("", cleaned)
    return _normalize_whitespace(cleaned)


def meaningful_segments(text: str) -> list[str]:
    """Candidate substrings of a normalized name.

    Each piece between separators is a segment. Pieces of more than two words
    also contribute every contiguous run of at least two words whose joined
    length exceeds five characters. The whole text is always the last segment.
    """
    segments: list[str] = []
    for piece in _SEGMENT_SEPARATOR_RE.split(text):
        trimmed = piece.strip()
        if not trimmed:
            continue
        segments.append(trimmed)

        words = trimmed.split()
        if len(words) <= 2:
            continue
        for start in range(len(words) - 1):
            for end in range(start + 2, len(words) + 1):
                sub_segment = " ".join(words[start:end])
                if len(sub_segment) > _MIN_SUBSEGMENT_LENGTH and sub_segment not in segments:
                    segments.append(sub_segment)

    segments.append(text)
    return segments


def _word_frequencies(names: list[str]) -> Counter[str]:
    frequencies: Counter[str] = Counter()
    for name in names:
        for word in name.split():
            if len(word) > 1:
                frequencies[word] += 1
    return frequencies


def _best_segment(names: list[str], frequencies: Counter[str]) -> str:
    best = ""
    highest = SEGMENT_SCORE_THRESHOLD
    for i, name in enumerate(names):
        for segment in meaningful_segments(name):
            if len(segment) < _MIN_SEGMENT_LENGTH:
                continue

            cross_score = sum(
                similarity_score(segment, other) for j, other in enumerate(names) if j != i
            )
            words = segment.split()
            weight = sum(frequencies[word] for word in words if len(word) > 1)
            score = cross_score * (weight / len(words))

            if score > highest:
                highest = score
                best = segment
    return best


def _casing_votes(raw_names: list[str]) -> dict[str, Counter[str]]:
    votes: dict[str, Counter[str]] = {}
    for raw_name in raw_names:
        for raw_word in _CASING_SPLIT_RE.split(raw_name):
            if len(raw_word) <= 1:
                continue
            votes.setdefault(raw_word.lower(), Counter())[raw_word] += 1
    return votes


def _most_common_casing(variants: Counter[str]) -> str:
    # First variant seen wins ties.
    best, best_count = "", 0
    for casing, count in variants.items():
        if count > best_count:
            best, best_count = casing, count
    return best


def restore_capitalization(name: str, raw_names: list[str]) -> str:
    """Re-case a lower-cased name using the casings observed in the raw names.

    Words seen in the raw names take their most frequent casing. Unseen words
    get title casing, except minor words after the first position and short
    all-uppercase tokens (model numbers, abbreviations), which are kept.
    """
    votes = _casing_votes(raw_names)
    result = []
    for index, word in enumerate(name.split(" ")):
        if not word:
            result.append("")
            continue
        lower = word.lower()
        if lower in votes:
            result.append(_most_common_casing(votes[lower]))
        elif index == 0:
            result.append(word[0].upper() + word[1:])
        elif lower in _MINOR_WORDS:
            result.append(lower)
        elif word == word.upper() and len(word) <= 5:
            result.append(word)
        else:
            result.append(word[0].upper() + word[1:].lower())
    return " ".join(result)


def extract_product_name(raw_names: list[str]) -> str:
    """Reduce a list of raw product titles to one clean product name.

    Empty input gives an empty string. A single title is only
    whitespace-normalized and re-cased. Otherwise the best scoring segment
    across all titles wins, falling back to the four most frequent words.
    """
    valid = [name for name in raw_names or [] if name]
    if not valid:
        return ""

    if len(valid) == 1:
        return restore_capitalization(_normalize_whitespace(valid[0]), valid)

    normalized = [_normalize_whitespace(name.lower()) for name in valid]
    frequencies = _word_frequencies(normalized)

    best = _best_segment(normalized, frequencies)
    if not best:
        frequent = [word for word, _ in frequencies.most_common() if len(word) > 2]
        best = " ".join(frequent[:_FALLBACK_WORD_COUNT])

    return restore_capitalization(best, valid)
