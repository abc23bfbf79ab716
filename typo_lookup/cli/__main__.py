import sys

from typo_lookup.cli.cli import main

sys.exit(main())
