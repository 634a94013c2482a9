"""
Helper functions for the mathematics of elliptic curves
"""

__all__ = ["is_quadratic_residue", "sqrt_mod_p"]


def is_quadratic_residue(n: int, p: int) -> bool:
    """
    Euler's criterion. Returns True if (n|p) != -1, so 0 counts as a residue.
    """
    n = n % p
    if n == 0:
        return True
    return pow(n, (p - 1) >> 1, p) == 1


def sqrt_mod_p(n: int, p: int) -> int:
    """
    Return r with r^2 = n (mod p) for a prime p = 3 (mod 4), which covers secp256k1: r = n^((p+1)/4).
    """
    if p & 3 != 3:
        raise ValueError(f"Square roots are only supported for primes p = 3 (mod 4), received p = {p}")

    n = n % p
    if not is_quadratic_residue(n, p):
        raise ValueError("Square root requested for a quadratic non-residue")
    return pow(n, (p + 1) >> 2, p)
