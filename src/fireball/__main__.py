import sys

from fireball.cli import main

sys.exit(main())
