"""Allow ``python -m nestify``."""

from nestify.cli import main

main()
