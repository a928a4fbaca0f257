import sys

from solprobe.harness.runner import main

sys.exit(main())
