import pytest

from author_ally.syllables import count_syllables, estimate_word_syllables


@pytest.mark.parametrize(
    ("word", "expected"),
    [
        ("cat", 1),
        ("the", 1),
        ("cake", 1),
        ("whale", 1),
        ("table", 2),
        ("little", 2),
        ("ready", 2),
        ("beautiful", 4),
    ],
)
def test_estimate_word_syllables(word: str, expected: int):
    assert estimate_word_syllables(word) == expected


def test_words_without_vowel_groups_count_once():
    assert estimate_word_syllables("psst") == 1
    assert count_syllables("psst hmm") == 2


def test_count_syllables_ignores_punctuation_and_case():
    assert count_syllables("The TABLE, the cake!") == 5
    assert count_syllables("well-made") == count_syllables("well made")


def test_count_syllables_without_letters_is_zero():
    assert count_syllables("") == 0
    assert count_syllables("42 !! --") == 0
    assert count_syllables("こんにちは 世界") == 0
