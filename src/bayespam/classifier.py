# =============================================================================
# Naive Bayes Spam Classifier
# =============================================================================
# A simple bayesian spam classifier.
#
# How it works:
#   1. During training, we count how often each token appears in spam vs ham
#   2. Each token of a message to classify gets a spam rating:
#        - never seen:          0.5  (no idea)
#        - only seen in spam:   0.99
#        - only seen in ham:    0.01
#        - seen in both:        spam_freq / (spam_freq + ham_freq), floored
#                               at 0.01, where *_freq = count / class total
#   3. Ratings are combined into a single score:
#        score = ∏ r / (∏ r + ∏ (1 - r))
#      With more than 20 ratings only the 10 lowest and 10 highest are kept:
#      they carry the strongest evidence and bound the product's underflow.
#
# The rating bounds keep every rating away from 0 and 1, so the combination
# never degenerates to 0 / 0.
# =============================================================================

import logging
import math
from pathlib import Path
from typing import IO, Callable

from bayespam.config import DEFAULT_MODEL_PATH, ClassifierConfig
from bayespam.model import ModelIOError, ModelStats, TokenStatistics
from bayespam.tokenizer import tokenize

logger = logging.getLogger(__name__)


class Classifier:
    """
    Bayesian spam classifier.

    Usage:
        >>> classifier = Classifier()
        >>> classifier.train_spam("Don't forget our special promotion: -30% on men shoes, only today!")
        >>> classifier.train_ham("Hi Bob, don't forget our meeting today at 4pm.")
        >>> classifier.identify("Lose up to 19% weight. Special promotion on our new weightloss.")
        True
        >>> classifier.save_file(Path("model.json"), pretty=True)

    Attributes:
        model: Token statistics learned so far.
        config: Scoring policy.
        tokenizer: Splits messages into tokens.
    """

    def __init__(
        self,
        model: TokenStatistics | None = None,
        config: ClassifierConfig | None = None,
        tokenizer: Callable[[str], list[str]] | None = None,
    ) -> None:
        """
        Initialize the classifier.

        Args:
            model: Pre-trained statistics. Starts empty if None.
            config: Scoring policy. Uses the defaults if None.
            tokenizer: Tokenizer function. Uses Unicode word segmentation if None.

        Raises:
            ConfigError: If config holds out-of-range values.
        """
        self.model = model if model is not None else TokenStatistics()
        self.config = config or ClassifierConfig()
        self.config.validate()
        self.tokenizer = tokenizer or tokenize

    # -------------------------------------------------------------------------
    # Construction from persisted models
    # -------------------------------------------------------------------------

    @classmethod
    def from_pre_trained(
        cls,
        stream: IO,
        config: ClassifierConfig | None = None,
    ) -> "Classifier":
        """
        Build a classifier with a pre-trained model read from stream.

        Raises:
            ModelIOError: If the stream can't be read.
            ModelFormatError: If the stream doesn't hold a valid model.
        """
        return cls(model=TokenStatistics.load(stream), config=config)

    @classmethod
    def from_file(
        cls,
        path: Path | str,
        config: ClassifierConfig | None = None,
    ) -> "Classifier":
        """
        Build a classifier with a pre-trained model loaded from path.

        Raises:
            ModelIOError: If the file can't be opened or read.
            ModelFormatError: If the file doesn't hold a valid model.
        """
        logger.debug(f"Loading model from {path}")
        try:
            with open(path, "rb") as f:
                return cls.from_pre_trained(f, config=config)
        except OSError as e:
            raise ModelIOError(f"Could not open model file {path}: {e}") from e

    def save(self, stream: IO, pretty: bool = False) -> None:
        """
        Save the model to stream as JSON.

        Args:
            stream: Writable binary or text stream.
            pretty: Indent the JSON for humans.

        Raises:
            ModelIOError: If the stream can't be written.
        """
        self.model.save(stream, pretty=pretty)

    def save_file(self, path: Path | str, pretty: bool = False) -> None:
        """
        Save the model to path, creating parent directories as needed.

        Raises:
            ModelIOError: If the file can't be written.
        """
        path = Path(path)
        logger.debug(f"Saving model to {path}")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "wb") as f:
                self.save(f, pretty=pretty)
        except OSError as e:
            raise ModelIOError(f"Could not write model file {path}: {e}") from e

    @property
    def stats(self) -> ModelStats:
        """Get model statistics."""
        return self.model.stats

    # -------------------------------------------------------------------------
    # Training
    # -------------------------------------------------------------------------

    def train_spam(self, message: str) -> None:
        """
        Train the classifier with a spam message.

        Every token counts, repeated tokens included.
        """
        tokens = self.tokenizer(message)
        for token in tokens:
            self.model.increment_spam(token)
        logger.debug(f"Trained {len(tokens)} spam tokens")

    def train_ham(self, message: str) -> None:
        """Train the classifier with a ham message."""
        tokens = self.tokenizer(message)
        for token in tokens:
            self.model.increment_ham(token)
        logger.debug(f"Trained {len(tokens)} ham tokens")

    # -------------------------------------------------------------------------
    # Scoring
    # -------------------------------------------------------------------------

    def rate_token(self, token: str) -> float:
        """
        Compute the probability of a token to be part of a spam.

        Args:
            token: A single token, as produced by the tokenizer.

        Returns:
            The token's spam rating (see module header for the rules).
            A counter with both counts at zero, which only a hand-written
            model file can hold, carries no evidence and rates like an
            unseen token rather than as ham.
        """
        counter = self.model.table.get(token)
        if counter is None:
            return self.config.initial_rating

        if counter.spam > 0 and counter.ham == 0:
            return self.config.spam_rating
        if counter.spam == 0 and counter.ham > 0:
            return self.config.ham_rating

        if counter.spam > 0 and counter.ham > 0:
            spam_total = self.model.spam_total
            ham_total = self.model.ham_total
            if spam_total > 0 and ham_total > 0:
                ham_freq = counter.ham / ham_total
                spam_freq = counter.spam / spam_total
                return max(self.config.min_rating, spam_freq / (ham_freq + spam_freq))
            # Can't happen while totals match the table
            logger.warning(f"Token {token!r} has counts but model totals are zero")

        return self.config.initial_rating

    def rate_tokens(self, message: str) -> list[float]:
        """Rate every token of message, in order, duplicates included."""
        return [self.rate_token(token) for token in self.tokenizer(message)]

    def score(self, message: str) -> float:
        """
        Compute the spam score of a message.

        Args:
            message: Message to score.

        Returns:
            Score between 0.0 and 1.0. The higher the score, the more likely
            the message is spam. A message without any token scores 0.0.
        """
        ratings = self.rate_tokens(message)
        if not ratings:
            return 0.0

        limit = self.config.max_ratings
        if len(ratings) > limit:
            ratings.sort()
            half = limit // 2
            ratings = ratings[:half] + ratings[-half:]

        product = math.prod(ratings)
        alt_product = math.prod(1.0 - rating for rating in ratings)
        score = product / (product + alt_product)

        logger.debug(f"Scored message: {score:.4f} from {len(ratings)} ratings")
        return score

    def identify(self, message: str) -> bool:
        """Returns True if message scores above the spam threshold."""
        return self.score(message) > self.config.spam_threshold


# =============================================================================
# Pre-trained Model Shortcuts
# =============================================================================

def score(message: str, path: Path | str = DEFAULT_MODEL_PATH) -> float:
    """
    Compute the spam score of message with the model stored at path.

    Args:
        message: Message to score.
        path: Model file. Defaults to model.json in the cwd.

    Raises:
        ModelIOError: If the model file can't be read.
        ModelFormatError: If the model file is invalid.
    """
    return Classifier.from_file(path).score(message)


def identify(message: str, path: Path | str = DEFAULT_MODEL_PATH) -> bool:
    """
    Identify whether message is spam with the model stored at path.

    Raises:
        ModelIOError: If the model file can't be read.
        ModelFormatError: If the model file is invalid.
    """
    return Classifier.from_file(path).identify(message)
