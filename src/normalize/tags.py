from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from src.normalize.rules import coerce_text


@dataclass(frozen=True, slots=True)
class KeywordTag:
    tag: str
    notes: tuple[str, ...] = ()
    name: tuple[str, ...] = ()

    def matches(self, notes: str, name: str) -> bool:
        return any(keyword in notes for keyword in self.notes) or any(
            keyword in name for keyword in self.name
        )


@dataclass(frozen=True, slots=True)
class CategoryTagGroup:
    """Tags that apply only when the source category mentions one of `category_keywords`."""

    category_keywords: tuple[str, ...]
    tags: tuple[str, ...] = ()
    extras: tuple[KeywordTag, ...] = ()


NOTE_TAGS: tuple[KeywordTag, ...] = (
    KeywordTag("scholarships", notes=("scholarship",)),
    KeywordTag("sibling discount", notes=("sibling discount",)),
    KeywordTag("early bird", notes=("early bird",)),
    KeywordTag("aftercare", notes=("aftercare",)),
    KeywordTag("swimming", notes=("swim", "pool")),
    KeywordTag("field trips", notes=("field trip",)),
    KeywordTag("free", notes=("free",)),
    KeywordTag("bilingual", notes=("bilingual",)),
    KeywordTag("transportation", notes=("transportation", "bus")),
)

CATEGORY_TAG_GROUPS: tuple[CategoryTagGroup, ...] = (
    CategoryTagGroup(
        ("stem", "tech"),
        tags=("STEM",),
        extras=(
            KeywordTag("coding", notes=("coding", "minecraft", "ai", "game design")),
            KeywordTag("robotics", notes=("robot",)),
        ),
    ),
    CategoryTagGroup(
        ("arts", "music"),
        tags=("arts",),
        extras=(
            KeywordTag("visual arts", notes=("painting", "ceramic")),
            KeywordTag("music", notes=("music",)),
        ),
    ),
    CategoryTagGroup(
        ("theatre", "performing", "dance"),
        extras=(
            KeywordTag("dance", notes=("dance",), name=("dance", "dancer")),
            KeywordTag("theater", notes=("theatre", "theater", "musical", "broadway")),
        ),
    ),
    CategoryTagGroup(
        ("sport", "fitness"),
        tags=("sports",),
        extras=(
            KeywordTag("gymnastics", notes=("gymnastics",), name=("gymnastics",)),
            KeywordTag("rowing", notes=("rowing",), name=("rowing",)),
            KeywordTag("soccer", notes=("soccer",), name=("soccer",)),
            KeywordTag("horseback riding", notes=("horseback", "horse")),
        ),
    ),
    CategoryTagGroup(
        ("outdoor", "nature"),
        tags=("nature", "outdoor"),
        extras=(KeywordTag("wilderness", notes=("wilderness",)),),
    ),
    CategoryTagGroup(
        ("faith",),
        tags=("faith-based",),
        extras=(KeywordTag("church", notes=("bible", "christ")),),
    ),
    CategoryTagGroup(("overnight",), tags=("overnight", "sleepaway")),
    CategoryTagGroup(
        ("writing", "academic"),
        tags=("academic",),
        extras=(KeywordTag("writing", notes=("writing", "poetry", "fiction")),),
    ),
    CategoryTagGroup(("special", "inclusive"), tags=("inclusive", "special needs")),
)


def derive_tags(category: Any, name: Any, notes: Any) -> tuple[str, ...]:
    """Collect descriptive tags from the raw category, camp name and notes.

    Matching is plain substring search on lower-cased text. The result keeps
    first-seen order with duplicates removed.
    """

    lowered_category = (coerce_text(category) or "").lower()
    lowered_name = (coerce_text(name) or "").lower()
    lowered_notes = (coerce_text(notes) or "").lower()

    tags: list[str] = [tag.tag for tag in NOTE_TAGS if tag.matches(lowered_notes, lowered_name)]
    for group in CATEGORY_TAG_GROUPS:
        if not any(keyword in lowered_category for keyword in group.category_keywords):
            continue
        tags.extend(group.tags)
        tags.extend(extra.tag for extra in group.extras if extra.matches(lowered_notes, lowered_name))

    return tuple(dict.fromkeys(tags))
