import sys

from rallyboard.cli import main

sys.exit(main())
