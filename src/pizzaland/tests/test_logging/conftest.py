import pytest

from pizzaland.config.settings import Settings
from pizzaland.core.logging.builder import setup_logging


@pytest.fixture
def restore_logging():
    """Reinstall the session logging config after a test that replaced it."""
    yield
    setup_logging(Settings(ENV="testing", LOG_FORMAT="text", LOG_TO_STDOUT=True, LOG_LEVEL="DEBUG"))
