"""Allow ``python -m movie_catalog``."""

from movie_catalog.cli.main import main

if __name__ == "__main__":
    raise SystemExit(main())
