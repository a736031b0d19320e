"""Allow ``python -m sui_coin_merger``."""
from .cli import main

main()
