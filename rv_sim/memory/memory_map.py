class AddressRange:
    def __init__(self, low, size):
        self.low = low
        self.size = size
        self.high = low + (size - 1)

    def __hash__(self):
        return hash((self.low, self.high))

    def __eq__(self, other):
        return (self.low, self.high) == (other.low, other.high)

    def __repr__(self):
        return f"AddressRange({hex(self.low)}, {hex(self.size)})"

    def check_match(self, addr):
        if addr < self.low:
            return False
        if addr > self.high:
            return False
        return True
