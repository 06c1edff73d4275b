#
# Pytest Fixtures
#

# Standard library -----------------------------------------------------------------------------------------------------
import logging

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from objprinting.members import class_members


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def clear_members_cache():
    """Member descriptors are cached per class, test classes are often redefined locally."""
    class_members.cache_clear()
    yield
    class_members.cache_clear()


@pytest.fixture
def debug_log(caplog):
    """Capture objprinting DEBUG records."""
    caplog.set_level(logging.DEBUG, logger="objprinting")
    return caplog
