"""Allow ``python -m hackasm INPUT OUTPUT``."""

from hackasm.cli.hackasm import main

if __name__ == "__main__":
    main()
