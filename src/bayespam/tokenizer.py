# =============================================================================
# Message Tokenizer
# =============================================================================
# Splits a message into the words the classifier counts and rates.
#
# Segmentation follows the Unicode default word boundary rules (UAX #29),
# which the `regex` library applies to `\b` when the WORD flag is set. That
# keeps together:
#   - words in any script ("Noël", "Привет", "καλημέρα")
#   - contractions ("don't")
#   - mixed letters and digits ("4pm", "2ème")
#
# Segments without a single letter or digit (punctuation, whitespace) are
# dropped. Tokens are NOT lowercased or stemmed: "Free" and "free" are two
# different tokens.
# =============================================================================

import regex

# V1 makes split() cut at zero-width matches such as \b
_WORD_BOUNDARY = regex.compile(r"\b", flags=regex.WORD | regex.V1)


def tokenize(text: str) -> list[str]:
    """
    Split text into its words.

    Args:
        text: Message to split. Any string is accepted.

    Returns:
        Words in the order they appear in text. Empty if the text holds
        no letters or digits.

    Example:
        >>> tokenize("Hi Bob, don't forget our meeting at 4pm.")
        ['Hi', 'Bob', "don't", 'forget', 'our', 'meeting', 'at', '4pm']
    """
    return [
        segment
        for segment in _WORD_BOUNDARY.split(text)
        if _is_word(segment)
    ]


def _is_word(segment: str) -> bool:
    """A segment is a word if it holds at least one letter or digit."""
    return any(char.isalnum() for char in segment)
