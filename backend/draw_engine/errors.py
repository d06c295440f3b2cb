"""
Draw engine exceptions.

InvalidArgumentError and StructuralMismatchError are raised before any slot
is touched. OccupiedSlotError and CapacityExceededError signal that earlier
placements and the declared counts disagree.
"""

from typing import List, Optional


class DrawEngineError(Exception):
    """Base exception for draw engine errors"""

    pass


class InvalidArgumentError(DrawEngineError, ValueError):
    """Negative counts, non power-of-two sizes, or an invalid configuration"""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors: List[str] = list(errors) if errors else [message]


class StructuralMismatchError(DrawEngineError, ValueError):
    """Declared draw size disagrees with the round's actual slot count"""

    pass


class OccupiedSlotError(DrawEngineError, RuntimeError):
    """A seed was written into a slot that already holds a team"""

    pass


class CapacityExceededError(DrawEngineError, RuntimeError):
    """More placements required than empty slots remain"""

    pass
