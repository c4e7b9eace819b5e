"""Allow running as ``python -m genre_organizer``."""

from .cli import main

if __name__ == '__main__':
    main()
