# setup.py
from setuptools import setup, find_packages

setup(
    name="copylisp",
    version="0.1.0",
    description="A small Lisp interpreter over a copying garbage-collected heap",
    packages=find_packages(include=["copylisp", "copylisp.*"]),
    python_requires=">=3.10",
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["copylisp = copylisp.__main__:main"],
    },
    zip_safe=False,
)
