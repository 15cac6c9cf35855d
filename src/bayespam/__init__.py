# =============================================================================
# bayespam: A Simple Bayesian Spam Classifier
# =============================================================================
#
# Messages are cut into words (tokens) and compared against the tokens of
# every message trained so far, as spam or as ham. Each token gets a spam
# rating from its frequencies, and the ratings are combined into a single
# score between 0 and 1. Above 0.8 (by default) a message is spam.
#
# Use a pre-trained model (model.json in the current directory):
#
#   >>> import bayespam
#   >>> bayespam.identify("Lose up to 19% weight. Special promotion on our new weightloss.")
#   True
#
# Or train your own:
#
#   >>> from bayespam import Classifier
#   >>> classifier = Classifier()
#   >>> classifier.train_spam("Don't forget our special promotion: -30% on men shoes, only today!")
#   >>> classifier.train_ham("Hi Bob, don't forget our meeting today at 4pm.")
#   >>> classifier.identify("Hi Bob, can you send me your machine learning homework?")
#   False
#
# =============================================================================

__version__ = "1.1.0"
__app_name__ = "bayespam"

from bayespam.classifier import Classifier, identify, score
from bayespam.config import ClassifierConfig, Config, ConfigError
from bayespam.model import (
    BayespamError,
    ModelFormatError,
    ModelIOError,
    ModelStats,
    TokenCounter,
    TokenStatistics,
)
from bayespam.tokenizer import tokenize

__all__ = [
    "Classifier",
    "ClassifierConfig",
    "Config",
    "ConfigError",
    "BayespamError",
    "ModelFormatError",
    "ModelIOError",
    "ModelStats",
    "TokenCounter",
    "TokenStatistics",
    "identify",
    "score",
    "tokenize",
    "__version__",
    "__app_name__",
]
