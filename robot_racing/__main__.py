import sys

from robot_racing.cli import main

sys.exit(main())
