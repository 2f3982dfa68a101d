import sys

from pingprobe.cli import main

sys.exit(main())
