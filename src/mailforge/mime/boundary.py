# =============================================================================
# Boundary Generation
# =============================================================================
# Each multipart container gets its own boundary token built from 16 bytes
# of secure randomness. The random source is passed in so tests can use a
# deterministic one.
# =============================================================================

import secrets
from collections.abc import Callable

from mailforge.mime.errors import RandomnessError

BOUNDARY_PREFIX = "boundary-"
BOUNDARY_RANDOM_BYTES = 16


class BoundaryGenerator:
    """
    Produces fresh multipart boundary tokens.

    Usage:
        >>> generator = BoundaryGenerator()
        >>> generator.new_boundary()
        'boundary-3f0c...'

    Attributes:
        random_bytes: Callable returning n random bytes.
                      Defaults to secrets.token_bytes.
    """

    def __init__(self, random_bytes: Callable[[int], bytes] | None = None) -> None:
        self.random_bytes = random_bytes or secrets.token_bytes

    def new_boundary(self) -> str:
        """
        Generate a boundary for one multipart container.

        Returns:
            "boundary-" followed by 32 lowercase hex digits.

        Raises:
            RandomnessError: If the random source fails or returns short data.
        """
        try:
            data = self.random_bytes(BOUNDARY_RANDOM_BYTES)
        except Exception as e:
            raise RandomnessError(f"random source failed: {e}") from e

        if len(data) < BOUNDARY_RANDOM_BYTES:
            raise RandomnessError(
                f"random source returned {len(data)} bytes, "
                f"need {BOUNDARY_RANDOM_BYTES}"
            )

        return BOUNDARY_PREFIX + data[:BOUNDARY_RANDOM_BYTES].hex()
