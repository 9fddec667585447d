import io

NO_DATA = -1  # returned by BitReader.read_bits once the source runs dry

_FLUSH_AT = 4096


class BitWriter:
    def __init__(self, dst=None, *, owns: bool = False):
        self._f = io.BytesIO() if dst is None else dst
        self._owns = owns
        self._buf = bytearray()
        self._cur = 0
        self._nbits = 0  # bits currently in _cur (0..7)
        self._closed = False
        self.bits_written = 0

    @classmethod
    def open(cls, path) -> "BitWriter":
        return cls(open(path, "wb"), owns=True)

    def write_bits(self, n: int, value: int):
        """Write the low 'n' bits of value (MSB-first)."""
        if n < 1:
            raise ValueError(f"bit count must be positive, got {n}")
        if self._closed:
            raise ValueError("write to closed BitWriter")
        self._cur = (self._cur << n) | (value & ((1 << n) - 1))
        self._nbits += n
        while self._nbits >= 8:
            self._nbits -= 8
            self._buf.append((self._cur >> self._nbits) & 0xFF)
        self._cur &= (1 << self._nbits) - 1
        self.bits_written += n
        if len(self._buf) >= _FLUSH_AT:
            self._drain()

    def _drain(self):
        if self._buf:
            self._f.write(self._buf)
            self._buf.clear()

    def close(self):
        """Pad remaining bits with zeros and flush."""
        if self._closed:
            return
        if self._nbits > 0:
            self._buf.append((self._cur << (8 - self._nbits)) & 0xFF)
            self._cur = 0
            self._nbits = 0
        self._drain()
        self._f.flush()
        self._closed = True
        if self._owns:
            self._f.close()

    def getvalue(self) -> bytes:
        if not isinstance(self._f, io.BytesIO):
            raise TypeError("getvalue() needs an in-memory BitWriter")
        if not self._closed:
            self._drain()
        return self._f.getvalue()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False


class BitReader:
    def __init__(self, src, *, owns: bool = False):
        if isinstance(src, (bytes, bytearray, memoryview)):
            src = io.BytesIO(bytes(src))
        self._f = src
        self._owns = owns
        self._cur = 0
        self._nbits = 0  # unread bits left in _cur
        self.bits_read = 0

    @classmethod
    def open(cls, path) -> "BitReader":
        return cls(open(path, "rb"), owns=True)

    def read_bits(self, n: int) -> int:
        """
        Read the next 'n' bits as an unsigned int (MSB-first).
        Returns NO_DATA if fewer than 'n' bits are left.
        """
        if n < 1:
            raise ValueError(f"bit count must be positive, got {n}")
        while self._nbits < n:
            b = self._f.read(1)
            if not b:
                return NO_DATA
            self._cur = (self._cur << 8) | b[0]
            self._nbits += 8
        self._nbits -= n
        value = (self._cur >> self._nbits) & ((1 << n) - 1)
        self._cur &= (1 << self._nbits) - 1
        self.bits_read += n
        return value

    def read_bit(self) -> int:
        return self.read_bits(1)

    def reset(self):
        """Rewind to the first bit of the source."""
        self._f.seek(0)
        self._cur = 0
        self._nbits = 0
        self.bits_read = 0

    def close(self):
        if self._owns:
            self._f.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False
