"""Fragment classification.

This module decides whether the fragment of a URL (the part after "#")
satisfies a policy. A policy combines two kinds of rule:
- predicates over the raw fragment text, "#" included
- URL classifiers applied to the fragment content reparsed as a relative URL

Single-page applications commonly keep a path in the fragment, so the second
kind lets `https://example.com/#/account/settings` be checked like any other
URL. The reparse happens against a neutral context, never the outer URL.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from urlpolicy.classifier.combinators import MATCH_NO_URLS, URLClassifier, or_
from urlpolicy.core.constants import Classification
from urlpolicy.core.exceptions import InvalidRuleError
from urlpolicy.core.models import URLContext, URLValue


logger = logging.getLogger(__name__)


FragmentPredicate = Callable[[Optional[str]], bool]


def _always_false(fragment: Optional[str]) -> bool:
    return False


def _any_of(first: FragmentPredicate, second: FragmentPredicate) -> FragmentPredicate:
    def predicate(fragment: Optional[str]) -> bool:
        return first(fragment) or second(fragment)

    return predicate


@dataclass(frozen=True)
class FragmentClassifier:
    """Immutable fragment policy produced by FragmentClassifierBuilder.

    Holds only pure callables, so one instance may be shared freely.
    """
    fragment_predicate: FragmentPredicate
    as_relative_url_classifier: URLClassifier

    def classify(self, url: URLValue) -> Classification:
        """Classify the fragment of a URL.

        Args:
            url: URL whose fragment is checked

        Returns:
            MATCH, NOT_A_MATCH, or INVALID if the fragment had to be read as
            a URL and turned out to be malformed
        """
        fragment = url.get_fragment()
        result = Classification.NOT_A_MATCH
        if self.fragment_predicate(fragment):
            result = Classification.MATCH

        if (
            fragment is not None
            and result is Classification.NOT_A_MATCH
            and self.as_relative_url_classifier is not MATCH_NO_URLS
        ):
            # Explicitly do not resolve against url's own path.
            fragment_url = URLValue.of(URLContext.DEFAULT, fragment[1:])
            sub_result = self.as_relative_url_classifier(fragment_url)
            if sub_result is Classification.INVALID:
                logger.debug(
                    f"Fragment {fragment!r} of {url.url!r} is invalid as a relative URL"
                )
                return Classification.INVALID
            if sub_result is Classification.MATCH:
                result = Classification.MATCH

        return result

    __call__ = classify

    @staticmethod
    def or_(*classifiers: Callable[[URLValue], Classification]) -> Callable[[URLValue], Classification]:
        """Combine fragment classifiers so that any one of them may match.

        Useful for "no fragment, or a fragment that is an allowed path",
        since relative URL matching requires a fragment to be present.
        """
        if not classifiers:
            return FragmentClassifierBuilder().build()
        return or_(*classifiers)


class FragmentClassifierBuilder:
    """Accumulate fragment rules and build a FragmentClassifier.

    Not thread-safe: a builder belongs to whoever is assembling the policy.
    It may keep being used after build(); later registrations do not affect
    classifiers already built.

    Example:
        >>> from urlpolicy.classifier.combinators import path_glob
        >>> policy = (
        ...     FragmentClassifierBuilder()
        ...     .matches(lambda fragment: fragment is None)
        ...     .match_fragment_as_relative_url(path_glob("/app/*"))
        ...     .build()
        ... )
        >>> policy.classify(URLValue.of(URLContext.DEFAULT, "http://h/#/app/x"))
        <Classification.MATCH: 'match'>
    """

    def __init__(self) -> None:
        self._fragment_predicate: Optional[FragmentPredicate] = None
        self._as_relative_url_classifier: Optional[URLClassifier] = None

    @staticmethod
    def builder() -> "FragmentClassifierBuilder":
        """A new blank builder."""
        return FragmentClassifierBuilder()

    def matches(self, predicate: FragmentPredicate) -> "FragmentClassifierBuilder":
        """Match fragments for which `predicate` is true.

        The predicate receives None when the URL has no fragment and the
        fragment with its leading "#" otherwise. RFC 3986 treats two URIs
        differing only by a trailing "#" as different, so "#" alone is not
        the same as no fragment.

        Raises:
            InvalidRuleError: If predicate is not callable
        """
        if not callable(predicate):
            raise InvalidRuleError(f"Fragment predicate must be callable, got {predicate!r}")

        if self._fragment_predicate is None:
            self._fragment_predicate = predicate
        else:
            self._fragment_predicate = _any_of(self._fragment_predicate, predicate)
        return self

    def match_fragment_as_relative_url(self, classifier: URLClassifier) -> "FragmentClassifierBuilder":
        """Match fragments whose content, parsed as a relative URL, matches.

        The content (without "#") is resolved against URLContext.DEFAULT,
        an unknown host with a root path. An absolute path counts as relative
        here since it names no scheme.

        A fragment must be present for this to match. Use FragmentClassifier.or_
        to also allow URLs with no fragment.

        Raises:
            InvalidRuleError: If classifier is not callable
        """
        if not callable(classifier):
            raise InvalidRuleError(f"URL classifier must be callable, got {classifier!r}")

        if self._as_relative_url_classifier is None:
            self._as_relative_url_classifier = classifier
        else:
            self._as_relative_url_classifier = or_(self._as_relative_url_classifier, classifier)
        return self

    def build(self) -> FragmentClassifier:
        """Build a classifier from the rules registered so far.

        With no rules registered the result matches nothing.
        """
        fragment_predicate = self._fragment_predicate
        as_relative_url_classifier = self._as_relative_url_classifier
        if fragment_predicate is None:
            fragment_predicate = _always_false
        if as_relative_url_classifier is None:
            as_relative_url_classifier = MATCH_NO_URLS
        return FragmentClassifier(fragment_predicate, as_relative_url_classifier)
