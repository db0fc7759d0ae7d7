"""Module entrypoint for ``python -m asmhover``.

All argument parsing and hover setup happen in ``asmhover.cli``.
"""

import sys

from .cli import main


if __name__ == "__main__":
    sys.exit(main())
