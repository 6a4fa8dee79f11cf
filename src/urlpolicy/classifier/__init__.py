"""URL and fragment classification.

This package provides the classifiers a URL policy is assembled from:
- FragmentClassifierBuilder: Accumulate fragment rules
- FragmentClassifier: Immutable fragment policy built from those rules
- combinators: Leaf URL classifiers and their OR/AND composition
"""

from urlpolicy.classifier.combinators import MATCH_NO_URLS, URLClassifier
from urlpolicy.classifier.fragment import FragmentClassifier, FragmentClassifierBuilder

__all__ = [
    "MATCH_NO_URLS",
    "URLClassifier",
    "FragmentClassifier",
    "FragmentClassifierBuilder",
]
