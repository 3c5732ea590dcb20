import sys

from anvil.cli import main

sys.exit(main())
