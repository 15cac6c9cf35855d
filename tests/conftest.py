# =============================================================================
# Pytest Configuration and Fixtures
# =============================================================================
# Shared fixtures for the bayespam test suite.
# =============================================================================

import pytest
import tempfile
from pathlib import Path

from bayespam import Classifier


SPAM_TRAINING = "Don't forget our special promotion: -30% on men shoes, only today!"
HAM_TRAINING = "Hi Bob, don't forget our meeting today at 4pm."
SPAM_SAMPLE = "Lose up to 19% weight. Special promotion on our new weightloss."
HAM_SAMPLE = "Hi Bob, can you send me your machine learning homework?"

FRENCH_SPAM_TRAINING = "Bon plan pour Nöel: profitez de -50% sur le 2ème article."
FRENCH_HAM_TRAINING = "Vous êtes tous cordialement invités à notre repas de Noël."
FRENCH_SPAM_SAMPLE = "Préparez les fêtes de Nöel: 1 article offert!"
FRENCH_HAM_SAMPLE = "Pourras-tu être des nôtres pour le repas de Noël?"


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def isolated_config_home(temp_dir, monkeypatch):
    """Point XDG config lookups at an empty directory."""
    config_home = temp_dir / "xdg-config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture
def classifier():
    """Create an empty Classifier."""
    return Classifier()


@pytest.fixture
def trained_classifier():
    """Create a Classifier trained with one spam and one ham message."""
    classifier = Classifier()
    classifier.train_spam(SPAM_TRAINING)
    classifier.train_ham(HAM_TRAINING)
    return classifier


@pytest.fixture
def model_json():
    """A small model file as stored on disk."""
    return b'{"token_table": {"free": {"ham": 0, "spam": 3}, "meeting": {"ham": 2, "spam": 0}}}'
