"""Effect of 5-prime UTR variants on upstream open reading frames."""

__version__ = '1.0.0'
