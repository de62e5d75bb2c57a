"""hyperop: exact hyperoperation evaluator for arbitrary-precision naturals.

Successor, addition, multiplication, exponentiation, tetration and every
higher rank, evaluated without truncation and without native recursion.
"""

from hyperop.version import __version__

__all__: list[str] = ["__version__"]
