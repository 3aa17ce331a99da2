# setup.py
from setuptools import setup

setup(
    name="sapf-tools",
    version="0.1.0",
    description="Block locator, formatter, function catalog and language server for the SAPF language",
    packages=["sapf", "sapf.types", "sapf.text", "sapf.catalog", "sapf_lsp"],
    package_data={"sapf.catalog": ["language.json"]},
    python_requires=">=3.9",
    install_requires=[
        "pygls>=1.1,<2",
        "lsprotocol>=2023.0.0",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": [
            "sapf-ls=sapf_lsp.server:main",
            "sapf-generate-language=sapf.catalog.cli:main",
        ],
    },
    zip_safe=False,
)
