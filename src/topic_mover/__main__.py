"""Allow running topic mover with ``python -m topic_mover``."""

from .cli import main

main()
