import sys

from cfsm_verifier.cli import main

sys.exit(main())
