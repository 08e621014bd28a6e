# setup.py
from setuptools import setup, find_packages

setup(
    name="wisp",
    version="0.1.0",
    description="Wisp: a small Lisp with value semantics, a REPL and a language server",
    packages=find_packages(include=["wisp", "wisp.*", "wisp_lsp", "wisp_lsp.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pygls>=1.1,<2",
        "lsprotocol",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": [
            "wisp=wisp.repl:main",
            "wisp-ls=wisp_lsp.server:main",
        ],
    },
    zip_safe=False,
)
