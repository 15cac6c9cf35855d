# =============================================================================
# bayespam Entry Point for `python -m bayespam`
# =============================================================================
# This module allows bayespam to be run as a Python module:
#
#   python -m bayespam score "Special promotion!"
#
# This is equivalent to running the 'bayespam' command after installation.
# =============================================================================

import sys

from bayespam.app import main

if __name__ == "__main__":
    sys.exit(main())
