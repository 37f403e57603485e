from __future__ import annotations


class NewsTrendsError(Exception):
    """Base class for errors raised by the keyword pipeline."""


class InvalidInputError(NewsTrendsError, ValueError):
    """A document's text is missing or is not a string."""


class EmptyCorpusError(NewsTrendsError, ValueError):
    """No documents were supplied to build a vocabulary from."""


class InvalidArgumentError(NewsTrendsError, ValueError):
    """Illegal configuration, such as a non-positive top_k or an unknown scheme name."""
