"""Custom exception hierarchy for puzzle generation."""


class PuzzleError(Exception):
    """Base exception for generator failures."""


class InvalidSpecError(PuzzleError, ValueError):
    """Raised when a puzzle request violates the size or dot constraints."""


class GenerationInvariantViolation(PuzzleError):
    """Raised when a candidate path is not a Hamiltonian path of the grid."""


class PlacementError(PuzzleError):
    """Raised when a placement strategy cannot position every dot."""


class OracleTimeout(PuzzleError):
    """Raised when the solvability search runs out of its time budget."""


class OracleNoSolution(PuzzleError):
    """Raised when the solvability search proves a placement unsolvable."""


class ExhaustedRetries(PuzzleError):
    """Raised when every generation attempt failed."""
