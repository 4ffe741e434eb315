import sys

from platid.cli import main

sys.exit(main())
