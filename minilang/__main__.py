"""Allow ``python -m minilang``."""

from minilang.main import main

raise SystemExit(main())
