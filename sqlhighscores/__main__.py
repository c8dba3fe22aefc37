"""Allow ``python -m sqlhighscores``."""

from sqlhighscores.cli.main import main

raise SystemExit(main())
