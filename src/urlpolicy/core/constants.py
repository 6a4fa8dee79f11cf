"""Constants used throughout URLPolicy.

This module contains the tri-state classification enum and the default
values shared by the classifiers and the policy loader.
"""

from enum import Enum


class Classification(Enum):
    """Outcome of classifying a URL.

    INVALID is not a kind of NOT_A_MATCH: it means the policy could not
    determine applicability because some part of the URL is malformed.
    """
    MATCH = "match"
    NOT_A_MATCH = "not_a_match"
    INVALID = "invalid"

    def or_(self, other: "Classification") -> "Classification":
        """Combine two outcomes where either may match.

        INVALID dominates, then MATCH.
        """
        if self is Classification.INVALID or other is Classification.INVALID:
            return Classification.INVALID
        if self is Classification.MATCH or other is Classification.MATCH:
            return Classification.MATCH
        return Classification.NOT_A_MATCH

    def and_(self, other: "Classification") -> "Classification":
        """Combine two outcomes that must both match.

        INVALID dominates, then NOT_A_MATCH.
        """
        if self is Classification.INVALID or other is Classification.INVALID:
            return Classification.INVALID
        if self is Classification.MATCH and other is Classification.MATCH:
            return Classification.MATCH
        return Classification.NOT_A_MATCH


# Neutral origin used when a fragment is reparsed as a relative URL.
# The .invalid TLD is reserved by RFC 2606 and never resolves.
UNKNOWN_HOST = "unknown.invalid"
DEFAULT_BASE_URL = f"http://{UNKNOWN_HOST}/"


# Keys accepted in an `as_relative_url` rule of a policy file
RELATIVE_URL_RULE_KEYS = {"schemes", "hosts", "paths"}


DEFAULTS = {
    "allow_absent": False,
    "allow_empty": False,
}
