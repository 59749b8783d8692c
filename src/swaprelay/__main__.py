"""Allow running as `python -m swaprelay`."""

from swaprelay.main import main

main()
