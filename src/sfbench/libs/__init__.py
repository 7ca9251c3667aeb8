"""
Backend tables, one module per library family.

Each module exposes:
- is_available() -> bool: whether the library can be used on this machine
- build_backends() -> List[Backend]: the family's backends (empty if unavailable)

Families:
- std_math: Python's math module, scalar float64
- libm: C math library through ctypes, scalar float32/float64
- amdlibm: AMD libm (libalm) through ctypes, scalar float32/float64
- numpy_ufuncs: numpy ufuncs writing into the output buffer
- scipy_special: scipy.special ufuncs, complex functions, Hankel pair output
- numba_kernels: JIT-compiled lane kernels (4/8/16 lanes)
- approximants: adaptive Chebyshev approximants of scipy.special oracles
"""
