# setup.py
from setuptools import setup, find_packages

setup(
    name="monkey",
    version="0.1.0",
    description="Monkey: a small scripting language with a Pratt parser and tree-walking evaluator",
    packages=find_packages(include=["monkey", "monkey.*", "monkey_lsp", "monkey_lsp.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pygls>=1.1,<2",
        "lsprotocol>=2023.0.0",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": [
            "monkey=monkey.repl:main",
            "monkey-ls=monkey_lsp.server:main",
        ],
    },
    zip_safe=False,
)
