import sys

from cosmos_demo.main import main

sys.exit(main())
