# =============================================================================
# Token Statistics Model
# =============================================================================
# The trained state of the classifier: how many times each token was seen in
# spam and in ham messages.
#
# Persisted format (JSON):
#
#   {"token_table": {"free": {"ham": 0, "spam": 3},
#                    "meeting": {"ham": 2, "spam": 0}}}
#
# The spam/ham totals are cached sums over the table. They are never written
# to disk and are always recomputed after loading, so a hand-edited model file
# cannot leave them out of sync with the table.
#
# Loading is permissive: unknown keys (top-level or inside a counter) are
# ignored so newer files still load.
# =============================================================================

import io
import json
import logging
from dataclasses import asdict, dataclass, field
from typing import IO, Any

logger = logging.getLogger(__name__)

# Key under which the token table is stored
TABLE_KEY = "token_table"


@dataclass
class TokenCounter:
    """
    Observation counts for a single token.

    Attributes:
        ham: Number of times the token appeared in ham messages.
        spam: Number of times the token appeared in spam messages.
    """
    ham: int = 0
    spam: int = 0


@dataclass(frozen=True)
class ModelStats:
    """
    Snapshot of a model's size.

    Attributes:
        spam_total: Spam observations across all tokens.
        ham_total: Ham observations across all tokens.
        token_count: Number of distinct tokens.
    """
    spam_total: int = 0
    ham_total: int = 0
    token_count: int = 0


@dataclass
class TokenStatistics:
    """
    Mapping from token to its spam/ham counts, with cached totals.

    The table only grows: counters are created on first sight and then only
    incremented. Use increment_spam() / increment_ham() to mutate it so the
    cached totals stay exact.

    Usage:
        >>> model = TokenStatistics()
        >>> model.increment_spam("free")
        >>> model.spam_total
        1
        >>> with open("model.json", "rb") as f:
        ...     model = TokenStatistics.load(f)

    Attributes:
        table: Token to TokenCounter mapping.
    """
    table: dict[str, TokenCounter] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self._recompute_totals()

    # -------------------------------------------------------------------------
    # Totals
    # -------------------------------------------------------------------------

    @property
    def spam_total(self) -> int:
        """Sum of spam counts across the table."""
        return self._spam_total

    @property
    def ham_total(self) -> int:
        """Sum of ham counts across the table."""
        return self._ham_total

    @property
    def token_count(self) -> int:
        """Number of distinct tokens."""
        return len(self.table)

    @property
    def stats(self) -> ModelStats:
        """Get model statistics."""
        return ModelStats(
            spam_total=self._spam_total,
            ham_total=self._ham_total,
            token_count=len(self.table),
        )

    @property
    def is_trained(self) -> bool:
        """Returns True once both spam and ham have been observed."""
        return self._spam_total > 0 and self._ham_total > 0

    def _recompute_totals(self) -> None:
        self._spam_total = sum(counter.spam for counter in self.table.values())
        self._ham_total = sum(counter.ham for counter in self.table.values())

    # -------------------------------------------------------------------------
    # Training
    # -------------------------------------------------------------------------

    def increment_spam(self, token: str) -> None:
        """Record one spam observation of token."""
        self._counter(token).spam += 1
        self._spam_total += 1

    def increment_ham(self, token: str) -> None:
        """Record one ham observation of token."""
        self._counter(token).ham += 1
        self._ham_total += 1

    def _counter(self, token: str) -> TokenCounter:
        counter = self.table.get(token)
        if counter is None:
            counter = self.table[token] = TokenCounter()
        return counter

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Convert the table to its JSON shape. Totals are left out."""
        return {
            TABLE_KEY: {
                token: asdict(counter)
                for token, counter in self.table.items()
            },
        }

    @classmethod
    def from_dict(cls, data: Any) -> "TokenStatistics":
        """
        Build a model from parsed JSON data.

        The table is validated first, then the totals are derived from it.
        Any stored totals are ignored.

        Raises:
            ModelFormatError: If data doesn't have the expected shape.
        """
        if not isinstance(data, dict):
            raise ModelFormatError("Model must be a JSON object")
        if TABLE_KEY not in data:
            raise ModelFormatError(f"Model has no '{TABLE_KEY}' field")

        raw_table = data[TABLE_KEY]
        if not isinstance(raw_table, dict):
            raise ModelFormatError(f"'{TABLE_KEY}' must be a JSON object")

        table = {}
        for token, raw_counter in raw_table.items():
            if not isinstance(raw_counter, dict):
                raise ModelFormatError(f"Counter for token {token!r} must be a JSON object")
            table[token] = TokenCounter(
                ham=_read_count(raw_counter, "ham", token),
                spam=_read_count(raw_counter, "spam", token),
            )

        return cls(table=table)

    @classmethod
    def load(cls, stream: IO) -> "TokenStatistics":
        """
        Load a model from a readable stream.

        Args:
            stream: Binary or text stream holding the JSON model.

        Returns:
            The loaded model with freshly computed totals.

        Raises:
            ModelIOError: If the stream can't be read.
            ModelFormatError: If the content isn't a valid model.
        """
        try:
            raw = stream.read()
        except UnicodeDecodeError as e:
            raise ModelFormatError(f"Model is not valid text: {e}") from e
        except (OSError, ValueError) as e:
            # ValueError: the stream is closed
            raise ModelIOError(f"Could not read model: {e}") from e

        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as e:
            raise ModelFormatError(f"Model is not valid JSON: {e}") from e

        model = cls.from_dict(data)
        logger.info(
            f"Loaded model: {model.token_count} tokens, "
            f"{model.spam_total} spam / {model.ham_total} ham observations"
        )
        return model

    def save(self, stream: IO, pretty: bool = False) -> None:
        """
        Write the model to a writable stream as JSON.

        Args:
            stream: Binary or text stream to write to.
            pretty: Indent the output for humans. Both forms load the same.

        Raises:
            ModelIOError: If the stream can't be written.
        """
        if pretty:
            text = json.dumps(self.to_dict(), ensure_ascii=False, indent=2)
        else:
            text = json.dumps(self.to_dict(), ensure_ascii=False, separators=(",", ":"))

        payload = text if isinstance(stream, io.TextIOBase) else text.encode("utf-8")
        try:
            stream.write(payload)
        except (OSError, ValueError) as e:
            raise ModelIOError(f"Could not write model: {e}") from e

        logger.info(f"Saved model: {self.token_count} tokens")


def _read_count(raw_counter: dict[str, Any], name: str, token: str) -> int:
    """Read one non-negative integer count from a raw counter object."""
    if name not in raw_counter:
        raise ModelFormatError(f"Counter for token {token!r} has no '{name}' field")

    value = raw_counter[name]
    # bool is an int subclass, but true/false is not a count
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ModelFormatError(
            f"'{name}' for token {token!r} must be a non-negative integer, got {value!r}"
        )
    return value


# =============================================================================
# Exceptions
# =============================================================================

class BayespamError(Exception):
    """Base exception for classifier model operations."""
    pass


class ModelIOError(BayespamError):
    """Raised when a model stream or file can't be read or written."""
    pass


class ModelFormatError(BayespamError):
    """Raised when model data doesn't match the expected format."""
    pass
