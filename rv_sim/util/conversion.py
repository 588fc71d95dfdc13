def conv_to_uint32(val):
    assert isinstance(val, bytes)
    return int.from_bytes(val, byteorder="little", signed=False)


def conv_bytes_to_words(data):
    """Split little-endian bytes into 32-bit words, a trailing partial word is zero padded."""
    assert isinstance(data, bytes)
    remainder = len(data) % 4
    if remainder:
        data = data + bytes(4 - remainder)
    return [conv_to_uint32(data[i : i + 4]) for i in range(0, len(data), 4)]
