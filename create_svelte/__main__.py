"""Allow ``python -m create_svelte``."""

from create_svelte.cli import main

if __name__ == "__main__":
    main()
