"""Pass-through reader that reports every chunk it hands out to a progress sink."""
import sys
from dataclasses import dataclass

from tqdm import tqdm

from config import Config


@dataclass
class ProgressState:
    total: int
    bytes_read: int = 0

    def advance(self, n):
        """Add n bytes to the tally and return how much of it counts toward total."""
        counted = min(n, self.total - self.bytes_read)
        if counted <= 0:
            return 0
        self.bytes_read += counted
        return counted


class ProgressReader:
    """Wrap a binary file object so reads also advance a progress sink.

    The sink only needs an ``update(n)`` method (a tqdm bar fits). Bytes are
    returned exactly as the wrapped file produced them; the tally is clamped to
    ``total`` so a file that grows mid-upload cannot push the bar past 100%.
    """

    def __init__(self, raw, total, sink, chunk_size=None):
        self.raw = raw
        self.sink = sink
        self.state = ProgressState(total=total)
        self.chunk_size = Config.READ_CHUNK_SIZE if chunk_size is None else chunk_size
        if self.chunk_size <= 0:
            raise ValueError(f"chunk size must be positive, got {self.chunk_size}")

    def _report(self, chunk):
        counted = self.state.advance(len(chunk))
        if counted:
            self.sink.update(counted)
        return chunk

    def read(self, size=-1):
        if size is not None and size >= 0:
            return self._report(self.raw.read(size))
        # Whole-stream reads are split into blocks so the bar moves as we go.
        parts = []
        while True:
            chunk = self._report(self.raw.read(self.chunk_size))
            if not chunk:
                break
            parts.append(chunk)
        return b"".join(parts)

    def readable(self):
        return True

    def __iter__(self):
        while True:
            chunk = self.read(self.chunk_size)
            if not chunk:
                return
            yield chunk

    @property
    def name(self):
        return getattr(self.raw, "name", None)

    @property
    def closed(self):
        return self.raw.closed

    def close(self):
        self.raw.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


def progress_bar(total):
    return tqdm(
        total=total,
        desc="uploading",
        unit="B",
        unit_scale=True,
        unit_divisor=1024,
        file=sys.stderr,
    )
