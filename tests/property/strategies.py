"""
Custom Hypothesis Strategies for Corpus Data

Provides domain-specific strategies for verse numbers, chapters and whole
book collections, both well-formed and deliberately defective.
"""
from hypothesis import strategies as st

from domain.books import BookIdentifier
from domain.entities import Book, Books, Chapter, Verse
from domain.verse_number import Range, Single


# =============================================================================
# VERSE NUMBER STRATEGIES
# =============================================================================

def single_strategy(max_value=176):
    """Generate Single verse numbers (PSA 119 has 176 verses)."""
    return st.builds(Single, st.integers(min_value=1, max_value=max_value))


@st.composite
def range_strategy(draw, max_value=176):
    """Generate well-formed Range verse numbers."""
    start = draw(st.integers(min_value=1, max_value=max_value))
    end = draw(st.integers(min_value=start, max_value=max_value))
    return Range(start, end)


def verse_number_strategy(max_value=176):
    return st.one_of(single_strategy(max_value), range_strategy(max_value))


# =============================================================================
# CHAPTER STRATEGIES
# =============================================================================

@st.composite
def contiguous_chapter_strategy(draw, max_verses=40):
    """
    Generate a chapter that validates cleanly.

    Verses 1..n are split into consecutive Singles and Ranges and then
    stored in order.
    """
    n = draw(st.integers(min_value=1, max_value=max_verses))
    numbers = []
    current = 1
    while current <= n:
        width = draw(st.integers(min_value=0, max_value=min(3, n - current)))
        numbers.append(Single(current) if width == 0 else Range(current, current + width))
        current += width + 1
    return Chapter(verses=[Verse(number, f"verse {number}") for number in numbers])


@st.composite
def arbitrary_chapter_strategy(draw, max_verses=12):
    """Generate a chapter with any verse numbers in any order, possibly empty."""
    numbers = draw(st.lists(verse_number_strategy(max_value=20), max_size=max_verses))
    return Chapter(verses=[Verse(number, f"verse {number}") for number in numbers])


# =============================================================================
# BOOK COLLECTION STRATEGIES
# =============================================================================

@st.composite
def books_strategy(draw, valid_only=False, max_books=4, max_chapters=5):
    """
    Generate book collections.

    Args:
        valid_only: If True, chapters are contiguous from 1 and every
            chapter validates cleanly. If False, chapter numbers, verse
            numbers and emptiness are arbitrary.
    """
    identifiers = draw(
        st.lists(st.sampled_from(list(BookIdentifier)), min_size=1, max_size=max_books, unique=True)
    )
    pairs = []
    for identifier in identifiers:
        if valid_only:
            count = draw(st.integers(min_value=1, max_value=max_chapters))
            chapters = [(n, draw(contiguous_chapter_strategy())) for n in range(1, count + 1)]
        else:
            numbers = draw(st.lists(st.integers(min_value=1, max_value=10), max_size=max_chapters, unique=True))
            chapters = [(n, draw(arbitrary_chapter_strategy())) for n in numbers]
        pairs.append((identifier, Book(name=identifier.display_name, chapters=chapters)))
    return Books(pairs)
