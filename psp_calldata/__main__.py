import sys

from psp_calldata.cli import main

sys.exit(main())
