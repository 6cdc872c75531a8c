"""Allow running termistat with ``python -m termistat``."""

from termistat.app import main

if __name__ == "__main__":
    main()
