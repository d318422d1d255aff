"""
Signal Extractor

Applies the lexicon to normalized text and produces a Signals record:
theme tags, explicit-content buckets, blasphemy/self-harm excerpts,
theological claims and scripture references.

Signals are built fresh per analysis and never mutated afterwards.
Absent evidence is always an empty list, never None.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Optional

from sanctifai.lexicon import Lexicon, lyrics_lexicon


# Lexicon category -> Signals.explicit sub-bucket
EXPLICIT_BUCKETS: dict[str, str] = {
    "profanity": "language",
    "sexual": "sexual",
    "violence": "violence",
    "occult": "occult",
    "substances": "substances",
}

# Lexicon category -> theme tag (boolean presence)
THEME_CATEGORIES: dict[str, str] = {
    "worship": "worship",
    "repentance": "repentance-hope",
}

# Lexicon categories stored as top-level excerpt lists
FLAG_CATEGORIES = ("blasphemy", "selfharm")


# Concerning theological framings. Each surface phrasing maps to the
# canonical claim recorded in Signals.claims.
CONCERNING_CLAIMS: dict[str, str] = {
    "all paths lead to god": "all paths lead to god",
    "all roads lead to god": "all paths lead to god",
    "every religion leads to god": "all paths lead to god",
    "works-based salvation": "works-based salvation",
    "earn your salvation": "works-based salvation",
    "earn your way to heaven": "works-based salvation",
    "good deeds will save": "works-based salvation",
    "jesus is just a teacher": "jesus is just a teacher",
    "jesus was just a teacher": "jesus is just a teacher",
    "jesus was just a good man": "jesus is just a teacher",
    "jesus was only a prophet": "jesus is just a teacher",
}


BIBLE_BOOKS = (
    "genesis", "gen", "exodus", "ex", "leviticus", "lev", "numbers", "num",
    "deuteronomy", "deut", "joshua", "judges", "ruth", "samuel", "sam",
    "kings", "chronicles", "chron", "ezra", "nehemiah", "esther", "job",
    "psalm", "psalms", "ps", "proverbs", "prov", "ecclesiastes", "eccl",
    "isaiah", "isa", "jeremiah", "jer", "lamentations", "ezekiel", "ezek",
    "daniel", "dan", "hosea", "joel", "amos", "obadiah", "jonah", "micah",
    "nahum", "habakkuk", "zephaniah", "haggai", "zechariah", "malachi",
    "matthew", "matt", "mark", "luke", "john", "acts", "romans", "rom",
    "corinthians", "cor", "galatians", "gal", "ephesians", "eph",
    "philippians", "phil", "colossians", "col", "thessalonians", "thess",
    "timothy", "tim", "titus", "philemon", "hebrews", "heb", "james",
    "peter", "pet", "jude", "revelation", "rev",
)

_BIBLE_REF = re.compile(
    r"\b(?:[1-3]\s?)?(?:" + "|".join(BIBLE_BOOKS) + r")\.?\s+\d{1,3}:\d{1,3}(?:-\d{1,3})?\b",
    re.IGNORECASE,
)


@dataclass
class Signals:
    """Structured evidence extracted from one piece of text."""
    themes: list[str] = field(default_factory=list)
    explicit: dict[str, list[str]] = field(default_factory=dict)
    blasphemy: list[str] = field(default_factory=list)
    selfharm: list[str] = field(default_factory=list)
    claims: list[str] = field(default_factory=list)
    bible_refs: list[str] = field(default_factory=list)

    def explicit_for(self, bucket: str) -> list[str]:
        """Excerpts for an explicit sub-bucket. Missing bucket = empty."""
        return (self.explicit or {}).get(bucket) or []

    def has_theme(self, theme: str) -> bool:
        return theme in (self.themes or ())

    @property
    def is_empty(self) -> bool:
        return not (
            self.themes or any((self.explicit or {}).values()) or self.blasphemy
            or self.selfharm or self.claims or self.bible_refs
        )

    def to_dict(self) -> dict:
        return {
            "themes": list(self.themes or ()),
            "explicit": {k: list(v or ()) for k, v in (self.explicit or {}).items()},
            "blasphemy": list(self.blasphemy or ()),
            "selfharm": list(self.selfharm or ()),
            "claims": list(self.claims or ()),
            "bible_refs": list(self.bible_refs or ()),
        }


def extract_claims(text: str) -> list[str]:
    """Canonical concerning claims whose phrasing appears in text."""
    lowered = text.lower()
    claims: dict[str, None] = {}
    for phrase, canonical in CONCERNING_CLAIMS.items():
        if phrase in lowered:
            claims.setdefault(canonical, None)
    return list(claims)


def extract_bible_refs(text: str) -> list[str]:
    """Scripture references written in the text, e.g. "john 3:16"."""
    refs: dict[str, None] = {}
    for m in _BIBLE_REF.finditer(text):
        refs.setdefault(m.group(0), None)
    return list(refs)


def extract(
    text: str,
    lexicon: Lexicon = lyrics_lexicon,
    extra_themes: Optional[Iterable[str]] = None,
) -> Signals:
    """
    Build Signals from normalized text.

    Every lexicon category is checked independently. Categories that are
    neither themes nor top-level flags land in Signals.explicit, under
    their mapped bucket name or, for new categories, their own name.

    Args:
        text: Normalized text (see lexicon.normalize).
        lexicon: The pattern library to apply.
        extra_themes: Theme tags supplied by the caller (e.g. tags from
            the media narrative collaborator), merged after detected ones.
    """
    signals = Signals()

    for category in lexicon.categories:
        excerpts = lexicon.match(category, text)
        if category in THEME_CATEGORIES:
            if excerpts and THEME_CATEGORIES[category] not in signals.themes:
                signals.themes.append(THEME_CATEGORIES[category])
        elif category in FLAG_CATEGORIES:
            setattr(signals, category, excerpts)
        elif excerpts:
            bucket = EXPLICIT_BUCKETS.get(category, category)
            signals.explicit[bucket] = excerpts

    for theme in extra_themes or ():
        theme = str(theme).strip()
        if theme and theme not in signals.themes:
            signals.themes.append(theme)

    signals.claims = extract_claims(text)
    signals.bible_refs = extract_bible_refs(text)
    return signals
