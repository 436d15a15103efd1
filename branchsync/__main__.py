"""Allow running as ``python -m branchsync``."""

from .cli import main

if __name__ == "__main__":
    main()
