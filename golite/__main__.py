# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
import sys

from golite.driver import main

sys.exit(main())
