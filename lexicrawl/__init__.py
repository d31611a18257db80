"""lexicrawl: dictionary crawler that stores headwords, definitions and examples."""

__version__ = "1.0.0"
