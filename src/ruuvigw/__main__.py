import sys

from ruuvigw.cli import main

sys.exit(main())
