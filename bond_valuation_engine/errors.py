from __future__ import annotations


class InvalidInput(ValueError):
    """Precondition failure on curve, bond or engine construction."""
