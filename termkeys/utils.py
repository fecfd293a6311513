import socket
import logging

logger = logging.getLogger("termkeys")

PORT = 12013
DEFAULT_ADDRESS = ("127.0.0.1", PORT)


class UDPHandler(logging.Handler):
    """Send log records to a local UDP port (``termkeys --listen`` by default).

    In raw mode, anything written to stderr ends up in the middle of the
    screen, so logs are best read from another process. Long messages are
    sent in chunks of ``chunk_size`` bytes.
    """

    def __init__(self, udp_address=None, chunk_size=2**10):
        super().__init__()
        self.udp_address = tuple(udp_address or DEFAULT_ADDRESS)
        self.chunk_size = chunk_size
        self._socket = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)

    def emit(self, record):
        try:
            bb = self.format(record).encode()
            for i in range(0, len(bb), self.chunk_size):
                self._socket.sendto(bb[i : i + self.chunk_size], self.udp_address)
        except Exception:
            self.handleError(record)

    def close(self):
        self._socket.close()
        super().close()


def enable_udp_logging(level=logging.DEBUG):
    """Forward the termkeys logs to ``termkeys --listen``."""
    for handler in logger.handlers:
        if isinstance(handler, UDPHandler):
            return handler
    handler = UDPHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    return handler


def listen_to_logs():
    """Called from ``termkeys --listen``.

    This way we can see the logs from another process, so it does not get mixed up with the key inspector's output.
    """

    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(DEFAULT_ADDRESS)

    while True:
        data, addr = sock.recvfrom(2**20)
        print(data.decode())
