"""Allow `python -m tocpack`."""

from tocpack.main import main

main()
