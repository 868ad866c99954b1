# setup.py
from setuptools import setup, find_packages

setup(
    name="eta",
    version="0.3.0",
    description="A small Lisp interpreter with closures, partial application and bulk memory release",
    packages=find_packages(include=["eta", "eta.*"]),
    python_requires=">=3.10",
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["eta=eta.cli:main"],
    },
    zip_safe=False,
)
