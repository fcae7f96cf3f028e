"""
setup.py

Установка треугольного Peg Solitaire Explorer.

Использование:
    pip install -e .
    pip install -e .[test]
"""

from setuptools import setup

setup(
    name="peg_triangle",
    version="1.0.0",
    description="State-space explorer for triangular Peg Solitaire",
    packages=["core", "solvers", "analysis", "peg_io", "utils"],
    py_modules=["main"],
    python_requires=">=3.10",
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "peg-triangle=main:main",
        ],
    },
    zip_safe=False,
)
