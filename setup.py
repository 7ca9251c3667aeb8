"""
Setup script for sfbench.

Usage:
    pip install -e .           # Editable install
    pip install -e ".[dev]"    # With dev dependencies

Native backends (C libm, AMD libm) are loaded at run time through ctypes,
so there is nothing to compile here. AMD libm is optional: set
SFBENCH_AMDLIBM to libalm.so or put it under ./extern/amd-libm/lib.
"""

from setuptools import setup, find_packages


setup(
    name='sfbench',
    version='0.1.0',
    description='Throughput benchmark for special-function implementations',
    package_dir={'': 'src'},
    packages=find_packages(where='src'),
    python_requires='>=3.8',
    install_requires=[
        'numpy',
        'scipy',
        'numba',
    ],
    extras_require={
        'dev': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'sfbench=sfbench.cli:main',
        ],
    },
)
