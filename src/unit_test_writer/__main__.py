import sys

from unit_test_writer.cli import cli

sys.exit(cli())
