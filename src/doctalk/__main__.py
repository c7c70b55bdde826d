import sys

from doctalk.cli import main

sys.exit(main())
