"""
Sorting algorithms.

Each module here exposes `sort(a, *, config=None)` which sorts `a` in place;
the benchmark runner resolves algorithms by module name:

    cycle_sort        write-minimal cycle sort (returns the write count)
    builtin_timsort   Python's sorted(), written back with one slice assignment
"""
