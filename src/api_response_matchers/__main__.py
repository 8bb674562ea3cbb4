"""Module entry point for `python -m api_response_matchers`."""

from .cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
