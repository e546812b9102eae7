# =============================================================================
# mailforge Entry Point for `python -m mailforge`
# =============================================================================
# Equivalent to running the 'mailforge' command after installation.
# =============================================================================

import sys

from mailforge.app import main

if __name__ == "__main__":
    sys.exit(main())
