from setuptools import setup, find_packages
import os

install_requires = ["lark>=1.1.6", "pydantic>=2"]

# Define optional dependencies for development and specific features
extras_require = {"dev": ["pytest", "pygls>=1.1,<2"], "lsp": ["pygls>=1.1,<2"]}  # Language Server Protocol support

setup(
    name="wi-compiler",
    version="0.1.0",
    packages=find_packages(where=".", exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=install_requires,
    extras_require=extras_require,
    entry_points={
        "console_scripts": [
            "wic = wic.cli:main",
            "wic-lsp = wic.server:main",
        ],
    },
    include_package_data=True,
    package_data={"wic.lexer": ["tokens.lark"]},
    description="Lexer, type/value model and parser for the Wi language.",
    long_description=open("README.md").read() if os.path.exists("README.md") else "",
    long_description_content_type="text/markdown",
)
