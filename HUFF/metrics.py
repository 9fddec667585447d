def compression_ratio(n_in: int, n_out: int) -> float:
    if n_out == 0:
        return float("inf")
    return n_in / n_out

def bits_per_symbol(n_bits: int, n_symbols: int) -> float:
    if n_symbols == 0:
        return 0.0
    return n_bits / n_symbols
