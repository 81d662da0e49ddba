import sys

from resume_ingest.cli import main

sys.exit(main())
