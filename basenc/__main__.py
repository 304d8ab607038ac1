# Licensed under the GPLv3 - see LICENSE
import sys

from .cli import main

sys.exit(main())
