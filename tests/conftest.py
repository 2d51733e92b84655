import pytest

from analytic3d import tolerance


@pytest.fixture(autouse=True)
def _restore_tolerance():
    """every test starts from the default tolerance and leaves it intact"""
    previous = tolerance.set_tolerance(tolerance.DEFAULT_TOLERANCE, absolute=True)
    yield
    tolerance.restore(previous)
