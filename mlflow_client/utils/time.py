import time

NANOS_PER_MILLI = 1_000_000


def get_current_time_millis():
    """
    Returns the time in milliseconds since the epoch as an integer number.
    """
    return int(time.time() * 1000)


def get_current_time_nanos():
    """
    Returns the time in nanoseconds since the epoch as an integer number.
    """
    return time.time_ns()


def nanos_to_millis(nanos):
    return nanos // NANOS_PER_MILLI
