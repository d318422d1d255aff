"""
Scripture anchors referenced by rules.

Anchor keys are short slugs ("eph-4-29"). Unknown keys resolve to
nothing; rules may reference anchors this table does not carry.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

TRANSLATION = "KJV"


@dataclass(frozen=True)
class Anchor:
    key: str
    reference: str
    text: str
    translation: str = TRANSLATION

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "reference": self.reference,
            "text": self.text,
            "translation": self.translation,
        }


_VERSES = (
    ("eph-4-29", "Ephesians 4:29",
     "Let no corrupt communication proceed out of your mouth, but that which "
     "is good to the use of edifying, that it may minister grace unto the hearers."),
    ("col-3-8", "Colossians 3:8",
     "But now ye also put off all these; anger, wrath, malice, blasphemy, "
     "filthy communication out of your mouth."),
    ("1cor-6-18", "1 Corinthians 6:18",
     "Flee fornication. Every sin that a man doeth is without the body; but he "
     "that committeth fornication sinneth against his own body."),
    ("1cor-6-19", "1 Corinthians 6:19",
     "What? know ye not that your body is the temple of the Holy Ghost which is "
     "in you, which ye have of God, and ye are not your own?"),
    ("eph-5-3", "Ephesians 5:3",
     "But fornication, and all uncleanness, or covetousness, let it not be once "
     "named among you, as becometh saints;"),
    ("ps-11-5", "Psalm 11:5",
     "The LORD trieth the righteous: but the wicked and him that loveth violence "
     "his soul hateth."),
    ("prov-3-31", "Proverbs 3:31",
     "Envy thou not the oppressor, and choose none of his ways."),
    ("eph-5-18", "Ephesians 5:18",
     "And be not drunk with wine, wherein is excess; but be filled with the Spirit;"),
    ("deut-18-10", "Deuteronomy 18:10",
     "There shall not be found among you any one that maketh his son or his "
     "daughter to pass through the fire, or that useth divination, or an "
     "observer of times, or an enchanter, or a witch."),
    ("ex-20-7", "Exodus 20:7",
     "Thou shalt not take the name of the LORD thy God in vain; for the LORD "
     "will not hold him guiltless that taketh his name in vain."),
    ("ps-34-18", "Psalm 34:18",
     "The LORD is nigh unto them that are of a broken heart; and saveth such as "
     "be of a contrite spirit."),
    ("ps-95-6", "Psalm 95:6",
     "O come, let us worship and bow down: let us kneel before the LORD our maker."),
    ("ps-150-6", "Psalm 150:6",
     "Let every thing that hath breath praise the LORD. Praise ye the LORD."),
    ("1john-1-9", "1 John 1:9",
     "If we confess our sins, he is faithful and just to forgive us our sins, "
     "and to cleanse us from all unrighteousness."),
    ("acts-3-19", "Acts 3:19",
     "Repent ye therefore, and be converted, that your sins may be blotted out, "
     "when the times of refreshing shall come from the presence of the Lord;"),
    ("1john-4-8", "1 John 4:8",
     "He that loveth not knoweth not God; for God is love."),
    ("col-3-13", "Colossians 3:13",
     "Forbearing one another, and forgiving one another, if any man have a "
     "quarrel against any, even as Christ forgave you, so also do ye."),
    ("gal-1-8", "Galatians 1:8",
     "But though we, or an angel from heaven, preach any other gospel unto you "
     "than that which we have preached unto you, let him be accursed."),
    ("eph-2-8", "Ephesians 2:8",
     "For by grace are ye saved through faith; and that not of yourselves: it "
     "is the gift of God:"),
    ("john-14-6", "John 14:6",
     "Jesus saith unto him, I am the way, the truth, and the life: no man "
     "cometh unto the Father, but by me."),
    ("john-1-1", "John 1:1",
     "In the beginning was the Word, and the Word was with God, and the Word was God."),
    ("col-2-9", "Colossians 2:9",
     "For in him dwelleth all the fulness of the Godhead bodily."),
)

ANCHORS: dict[str, Anchor] = {
    key: Anchor(key=key, reference=ref, text=text) for key, ref, text in _VERSES
}


def resolve_anchors(keys: Iterable[str]) -> dict[str, Anchor]:
    """Known anchors for keys, in first-seen order. Unknown keys are skipped."""
    resolved: dict[str, Anchor] = {}
    for key in keys:
        anchor = ANCHORS.get(key)
        if anchor is not None and key not in resolved:
            resolved[key] = anchor
    return resolved
