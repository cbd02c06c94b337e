import sys

from projxo.cli import main

sys.exit(main())
