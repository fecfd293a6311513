import sys

from ._main import main, print_size
from .utils import enable_udp_logging, listen_to_logs


def cli(argv=None):
    argv = sys.argv if argv is None else argv
    if "--version" in argv:
        from . import __version__

        print("termkeys", __version__)
    elif "--listen" in argv:
        listen_to_logs()
    else:
        if "--log" in argv:
            enable_udp_logging()
        if "--size" in argv:
            sys.exit(print_size())
        main(raw="--raw" in argv)
