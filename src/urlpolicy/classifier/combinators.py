"""URL classifier combinators.

A URL classifier is any callable taking a URLValue and returning a
Classification. This module provides the leaf classifiers the policy loader
needs and the OR/AND combinators used to compose them.
"""

import fnmatch
from functools import reduce
from typing import Callable

from urlpolicy.core.constants import Classification
from urlpolicy.core.models import URLValue


URLClassifier = Callable[[URLValue], Classification]


def _match_no_urls(url: URLValue) -> Classification:
    return Classification.NOT_A_MATCH


# Recognised by identity: a fragment classifier configured with this does not
# bother reparsing fragments at all.
MATCH_NO_URLS: URLClassifier = _match_no_urls


def match_all(url: URLValue) -> Classification:
    """Match every well-formed URL."""
    if not url.is_valid:
        return Classification.INVALID
    return Classification.MATCH


def or_(*classifiers: URLClassifier) -> URLClassifier:
    """Classifier matching when any of `classifiers` matches.

    INVALID from any operand wins. With no operands returns MATCH_NO_URLS.
    """
    if not classifiers:
        return MATCH_NO_URLS
    if len(classifiers) == 1:
        return classifiers[0]

    def classify(url: URLValue) -> Classification:
        result = Classification.NOT_A_MATCH
        for classifier in classifiers:
            result = result.or_(classifier(url))
            if result is Classification.INVALID:
                break
        return result

    return classify


def and_(*classifiers: URLClassifier) -> URLClassifier:
    """Classifier matching when all of `classifiers` match.

    INVALID from any operand wins. With no operands returns match_all.
    """
    if not classifiers:
        return match_all
    if len(classifiers) == 1:
        return classifiers[0]

    def classify(url: URLValue) -> Classification:
        results = [classifier(url) for classifier in classifiers]
        return reduce(Classification.and_, results)

    return classify


def _leaf(test: Callable[[URLValue], bool]) -> URLClassifier:
    def classify(url: URLValue) -> Classification:
        if not url.is_valid:
            return Classification.INVALID
        return Classification.MATCH if test(url) else Classification.NOT_A_MATCH

    return classify


def scheme_in(*schemes: str) -> URLClassifier:
    """Match URLs whose scheme is one of `schemes` (case-insensitive)."""
    allowed = frozenset(scheme.lower() for scheme in schemes)
    return _leaf(lambda url: url.scheme in allowed)


def host_in(*hosts: str) -> URLClassifier:
    """Match URLs whose host is one of `hosts` (case-insensitive)."""
    allowed = frozenset(host.lower() for host in hosts)
    return _leaf(lambda url: url.host is not None and url.host in allowed)


def path_glob(*patterns: str) -> URLClassifier:
    """Match URLs whose path matches any of the glob `patterns`."""
    patterns = tuple(patterns)
    return _leaf(
        lambda url: any(fnmatch.fnmatchcase(url.path, pattern) for pattern in patterns)
    )
