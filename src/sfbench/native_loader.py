"""
Native shared-library loader for the ctypes backends.

Finds a shared library (an explicit path from the environment, a list of
search folders, then the system loader) and resolves typed function symbols
from it.

Policy:
    - A library that cannot be found is simply absent: ``load_native_library``
      returns None and the backend that wanted it is skipped. Callers that
      cannot run without it pass ``required=True`` and get a
      ``NativeSymbolError`` instead.
    - A library that loads but lacks a declared symbol is always an error.
      A half-resolved backend is never benchmarked.

Example:
    libm = load_native_library('m', required=True)
    sin = resolve_symbol(libm, 'sin', ctypes.c_double, [ctypes.c_double])
"""

import ctypes
import ctypes.util
import os
from pathlib import Path
from typing import Callable, Iterable, Optional, Sequence


class NativeSymbolError(RuntimeError):
    """A required shared library or one of its symbols could not be resolved."""


def _find_in_dirs(name: str, search_dirs: Iterable[Path]) -> Optional[Path]:
    patterns = [f'lib{name}.so', f'lib{name}.so.*', f'lib{name}.dylib', f'lib{name}.*.dylib', f'{name}.dll']
    for folder in search_dirs:
        folder = Path(folder)
        if not folder.is_dir():
            continue
        for pattern in patterns:
            matches = sorted(folder.glob(pattern))
            if matches:
                return matches[0]
    return None


def find_library_path(name: str, search_dirs: Iterable[Path] = (), env_var: Optional[str] = None) -> Optional[str]:
    """
    Locate a shared library without loading it.

    Args:
        name: Library name without prefix/suffix (e.g. 'm', 'alm')
        search_dirs: Extra folders to search before the system loader
        env_var: Environment variable that may hold an explicit path

    Returns:
        A path or loader name usable with ctypes.CDLL, or None if not found
    """
    if env_var:
        explicit = os.environ.get(env_var)
        if explicit:
            return explicit if Path(explicit).exists() else None

    dirs = list(search_dirs)
    dirs += [Path(p) for p in os.environ.get('LD_LIBRARY_PATH', '').split(os.pathsep) if p]
    found = _find_in_dirs(name, dirs)
    if found is not None:
        return str(found)

    return ctypes.util.find_library(name)


def load_native_library(name: str, search_dirs: Iterable[Path] = (), env_var: Optional[str] = None,
                        required: bool = False):
    """
    Load a shared library with ctypes.

    Returns:
        The ctypes.CDLL, or None if the library is absent and not required

    Raises:
        NativeSymbolError: if ``required`` and the library cannot be loaded
    """
    path = find_library_path(name, search_dirs, env_var)
    if path is None:
        if required:
            raise NativeSymbolError(f"Required native library '{name}' not found")
        return None

    try:
        return ctypes.CDLL(path)
    except OSError as e:
        if required:
            raise NativeSymbolError(f"Required native library '{name}' failed to load from {path}: {e}") from e
        return None


def resolve_symbol(lib, symbol: str, restype, argtypes: Sequence) -> Callable:
    """
    Resolve one typed function from a loaded library.

    Raises:
        NativeSymbolError: if the symbol is missing
    """
    try:
        fn = lib[symbol]
    except AttributeError as e:
        raise NativeSymbolError(f"Symbol '{symbol}' not found in {getattr(lib, '_name', lib)}") from e
    fn.restype = restype
    fn.argtypes = list(argtypes)
    return fn
