"""
Lexicon — Text Normalizer and Pattern Library

The lexicon defines:
  1. How raw text is normalized before matching
  2. Which content categories exist (profanity, occult, worship, ...)
  3. The patterns that detect membership in each category

Patterns are data, not code. Each entry is a LexiconPattern with a
matching kind:
  - "boundary": a word or short phrase (regex fragment allowed) that
                only matches at word boundaries
  - "fuzzed":   a base word that still matches with 0-2 non-alphanumeric
                characters between its letters ("f.u.c.k", "f*ck")
  - "sequence": boundary terms that must all appear, in order, anywhere
                in the text ("holy ... holy")

All matching is case-insensitive. Categories are checked independently;
one input may land in several categories at once.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional, Sequence

# --- Lexicon Version (stamped on every analysis result) ---
LEXICON_VERSION = "1.0.0"

# Characters allowed between letters of a fuzzed word
FUZZ_GAP = r"[^a-z0-9]{0,2}"


# ============================================================
# TEXT NORMALIZER
# ============================================================

_BRACKETED = re.compile(r"\[[^\]]*\]")
_SINGLE_QUOTES = re.compile(r"[‘’‚‛]")
_DOUBLE_QUOTES = re.compile(r"[“”„‟]")
_WHITESPACE = re.compile(r"\s+")


def normalize(raw: str) -> str:
    """
    Normalize raw lyrics or narrative text for matching.

    Lowercases, drops bracketed annotations such as "[Chorus]",
    straightens curly quotes and collapses whitespace. Never fails.
    """
    text = raw.lower()
    text = _BRACKETED.sub(" ", text)
    text = _SINGLE_QUOTES.sub("'", text)
    text = _DOUBLE_QUOTES.sub('"', text)
    text = _WHITESPACE.sub(" ", text)
    return text.strip()


# ============================================================
# PATTERN DEFINITIONS
# ============================================================

@dataclass(frozen=True)
class LexiconPattern:
    """A single detection pattern inside a lexicon category."""
    source: str
    kind: str = "boundary"  # "boundary" | "fuzzed" | "sequence"
    terms: tuple[str, ...] = ()

    def compile(self):
        if self.kind == "fuzzed":
            body = FUZZ_GAP.join(re.escape(ch) for ch in self.source)
            return re.compile(body, re.IGNORECASE)
        if self.kind == "boundary":
            return re.compile(rf"\b(?:{self.source})\b", re.IGNORECASE)
        if self.kind == "sequence":
            if not self.terms:
                raise ValueError("Sequence pattern needs at least one term")
            return SequencePattern(self.terms)
        raise ValueError(f"Unknown pattern kind: {self.kind}")


@dataclass(frozen=True)
class SequenceMatch:
    """Span covering every term of a sequence pattern."""
    text: str

    def group(self, index: int = 0) -> str:
        return self.text


class SequencePattern:
    """
    Ordered co-occurrence of boundary terms ("grace ... through ... christ").

    Each term is searched once, starting where the previous term ended,
    so matching is linear in the text length.
    """

    def __init__(self, terms: Sequence[str]):
        self.terms = tuple(terms)
        self._compiled = tuple(
            re.compile(rf"\b(?:{t})\b", re.IGNORECASE) for t in self.terms
        )

    def search(self, text: str) -> Optional[SequenceMatch]:
        pos = 0
        start = None
        for rx in self._compiled:
            m = rx.search(text, pos)
            if m is None:
                return None
            if start is None:
                start = m.start()
            pos = m.end()
        return SequenceMatch(text[start:pos])


def word(source: str) -> LexiconPattern:
    return LexiconPattern(source=source, kind="boundary")


def fuzz(letters: str) -> LexiconPattern:
    return LexiconPattern(source=letters, kind="fuzzed")


def seq(*terms: str) -> LexiconPattern:
    return LexiconPattern(source=" ... ".join(terms), kind="sequence", terms=terms)


LYRICS_PATTERNS: dict[str, tuple[LexiconPattern, ...]] = {
    "profanity": (
        fuzz("fuck"),
        word(r"god[\W_]*damn(?:ed)?"),
        word(r"damn(?:ed|it)?"),
        word(r"motherf\w*"),
        word(r"shit(?:t?y|head|talk)?"),
        word(r"bi+tch(?:es|y)?"),
        word(r"ass(?:hole|hat)?"),
        word(r"di+ck(?:head)?"),
        word(r"pu(?:ssy|zzy)"),
        word(r"cunt"),
        word(r"slag|slut|whore"),
        word(r"prick"),
    ),
    "sexual": (
        word(r"naked|nud(?:e|ity)|strip(?:per|ping)?|orgy|porno?|onlyfans"),
        word(r"twerk(?:ing)?|grind(?:ing)?|booty|thot"),
        word(r"sex(?:ual)?|hook[\W_]*up|one[\W_]*night|bedroom"),
    ),
    "violence": (
        word(r"kill|murder|stab|shoot|shooter|gun|glock|uzi|ak-?47|blood|gore"),
        word(r"beating|beat\s+up|assault|rob|robbery"),
        word(r"(?:graphic|extreme)\s+(?:violence|gore|bloodshed|brutality)"),
    ),
    "substances": (
        word(r"drunk|wasted|blackout|hangover"),
        word(r"weed|blunt|bong|marijuana|cannabis|dope"),
        word(r"coke|cocaine|heroin|meth|ketamine|mdma|ecstasy|molly"),
        word(r"xan(?:ax)?|perk|percocet|codeine|lean|sizzurp"),
    ),
    "occult": (
        word(r"witch(?:craft)?|sorcer(?:y|er)|magick?|tarot|ouija"),
        word(r"demon(?:ic)?|devil|satan|lucifer|possess(?:ed|ion)?"),
        word(r"seance|divination|astrology|horoscope"),
    ),
    "blasphemy": (
        word(r"jesus (?:christ|h christ)"),
        word(r"christ almighty"),
        word(r"(?:jesus|christ|god)\s+(?:fucking|fuck|damn)"),
    ),
    "selfharm": (
        word(r"kill myself|end my life|suicide|overdose|od|cut my (?:wrists|arms)"),
    ),
    "worship": (
        word(r"(?:praise|worship|adore|magnify)\s+(?:you|him|god|the lord|jesus)"),
        seq("holy", "holy"),
    ),
    "repentance": (
        word(r"repent|turn\s+away|confess|confession"),
        seq("grace|mercy", "through|in", "christ|jesus"),
        seq("hope", "christ|jesus|the lord"),
    ),
}


# ============================================================
# MATCHING
# ============================================================

def match_any(patterns: Iterable[re.Pattern], text: str) -> list[str]:
    """
    Run every pattern once against text.

    Collects the first matched substring of each pattern. Duplicate
    surface forms across patterns are kept once, in first-seen order.
    """
    hits: dict[str, None] = {}
    for rx in patterns:
        m = rx.search(text)
        if m:
            hits.setdefault(m.group(0), None)
    return list(hits)


class Lexicon:
    """
    A compiled, versioned mapping of category name -> patterns.

    Instances are immutable after construction and safe to share
    across concurrent analyses.
    """

    def __init__(
        self,
        categories: Mapping[str, Sequence[LexiconPattern]],
        version: str = LEXICON_VERSION,
    ):
        self.version = version
        self._patterns = {name: tuple(pats) for name, pats in categories.items()}
        self._compiled = {
            name: tuple(p.compile() for p in pats)
            for name, pats in self._patterns.items()
        }

    @property
    def categories(self) -> list[str]:
        return list(self._compiled)

    def __contains__(self, category: str) -> bool:
        return category in self._compiled

    def match(self, category: str, text: str) -> list[str]:
        """Matched excerpts for one category. Unknown category = no match."""
        return match_any(self._compiled.get(category, ()), text)

    def extended(
        self, extra: Mapping[str, Sequence[LexiconPattern]],
    ) -> "Lexicon":
        """Return a new lexicon with extra patterns appended per category."""
        merged = {name: list(pats) for name, pats in self._patterns.items()}
        for name, pats in extra.items():
            merged.setdefault(name, []).extend(pats)
        return Lexicon(merged, version=self.version)

    def describe(self) -> list[dict]:
        """
        Return the detection surface, one entry per category.

        Used by the GET /lexicon endpoint.
        """
        return [
            {
                "category": name,
                "patterns": [
                    {"kind": p.kind, "source": p.source} for p in pats
                ],
            }
            for name, pats in self._patterns.items()
        ]


# ============================================================
# SINGLETON: compiled once, never mutated
# ============================================================

lyrics_lexicon = Lexicon(LYRICS_PATTERNS)
