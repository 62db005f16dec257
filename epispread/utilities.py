import numpy as np

LEFT_PAD = 3

# Utilities for random number generators

def make_random_generator(seed=None):
    """
    Return a numpy.random.Generator; `seed` may already be one, in which case
    it is returned unchanged.
    """
    if isinstance(seed, np.random.Generator):
        return seed

    return np.random.default_rng(seed)

def spawn_random_generators(seed, count):
    """
    Return `count` statistically independent generators derived from `seed`.
    """
    seed_sequence = np.random.SeedSequence(seed)
    return [np.random.default_rng(child) for child in seed_sequence.spawn(count)]

# Utilities for console reports; every line is flushed at once

def print_start_of(module_name):
    print(" " * LEFT_PAD + str(module_name) + ": started", flush=True)

def print_end_of(module_name):
    print(" " * LEFT_PAD + str(module_name) + ": ended\n", flush=True)

def print_info_module(module_name, *args, **kwargs):
    """Print `args` after a '*' marker and the name of the reporting module."""
    print("*" + " " * (LEFT_PAD - 1) + str(module_name) + ": ", end='')
    print(*args, **kwargs, flush=True)

def print_warning_module(module_name, *args, **kwargs):
    """Same as `print_info_module`, with a '!' marker."""
    print("!" + " " * (LEFT_PAD - 1) + str(module_name) + ": ", end='')
    print(*args, **kwargs, flush=True)
