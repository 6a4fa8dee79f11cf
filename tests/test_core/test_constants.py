"""Unit tests for the Classification tri-state algebra."""

import itertools
import sys
import unittest
from pathlib import Path

# Add src to path for imports
src_path = Path(__file__).parent.parent.parent / "src"
sys.path.insert(0, str(src_path))

from urlpolicy.core.constants import Classification


MATCH = Classification.MATCH
NOT_A_MATCH = Classification.NOT_A_MATCH
INVALID = Classification.INVALID


class TestClassificationOr(unittest.TestCase):
    """Test suite for Classification.or_."""

    def test_invalid_dominates(self):
        """Test that INVALID wins over every other outcome."""
        for other in Classification:
            self.assertIs(INVALID.or_(other), INVALID)
            self.assertIs(other.or_(INVALID), INVALID)

    def test_match_wins_over_not_a_match(self):
        """Test that MATCH or NOT_A_MATCH is MATCH."""
        self.assertIs(MATCH.or_(NOT_A_MATCH), MATCH)
        self.assertIs(NOT_A_MATCH.or_(MATCH), MATCH)

    def test_not_a_match_identity(self):
        """Test that NOT_A_MATCH is the identity of or_."""
        for value in Classification:
            self.assertIs(NOT_A_MATCH.or_(value), value)

    def test_commutative(self):
        """Test that operand order does not matter."""
        for a, b in itertools.product(Classification, repeat=2):
            self.assertIs(a.or_(b), b.or_(a))

    def test_associative(self):
        """Test that grouping does not matter."""
        for a, b, c in itertools.product(Classification, repeat=3):
            self.assertIs(a.or_(b).or_(c), a.or_(b.or_(c)))


class TestClassificationAnd(unittest.TestCase):
    """Test suite for Classification.and_."""

    def test_invalid_dominates(self):
        """Test that INVALID wins even over NOT_A_MATCH."""
        self.assertIs(INVALID.and_(NOT_A_MATCH), INVALID)
        self.assertIs(NOT_A_MATCH.and_(INVALID), INVALID)
        self.assertIs(MATCH.and_(INVALID), INVALID)

    def test_requires_both(self):
        """Test that MATCH requires both operands to match."""
        self.assertIs(MATCH.and_(MATCH), MATCH)
        self.assertIs(MATCH.and_(NOT_A_MATCH), NOT_A_MATCH)
        self.assertIs(NOT_A_MATCH.and_(MATCH), NOT_A_MATCH)

    def test_commutative(self):
        """Test that operand order does not matter."""
        for a, b in itertools.product(Classification, repeat=2):
            self.assertIs(a.and_(b), b.and_(a))


if __name__ == "__main__":
    unittest.main()
