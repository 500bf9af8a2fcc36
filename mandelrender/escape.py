ESCAPE_RADIUS = 2.0
ESCAPE_RADIUS_SQUARED = ESCAPE_RADIUS * ESCAPE_RADIUS


def escape_time(c: complex, max_iterations: int) -> int:
    """
    Return the number of z <- z*z + c updates performed before |z| reaches the
    escape radius, starting from z = 0.

    |z| is tested before each update, so the result is max_iterations exactly
    when the orbit stays bounded for the whole budget. A budget <= 0 performs
    no updates and returns 0.
    """
    z = 0j
    n = 0
    # |z|^2 against 4.0, no sqrt
    while (z.real * z.real + z.imag * z.imag) < ESCAPE_RADIUS_SQUARED and n < max_iterations:
        z = z * z + c
        n += 1
    return n
