import sys

from cutr import main

sys.exit(main())
