"""Package setup for terabox_manifest."""

from setuptools import setup, find_packages

setup(
    name="terabox-manifest",
    version="1.0.0",
    description="Flattened file manifest with direct download links for TeraBox share links",
    packages=find_packages(exclude=["tests", "tests.*", "api", "api.*"]),
    python_requires=">=3.10",
    install_requires=[
        "requests>=2.31.0",
        "beautifulsoup4>=4.12.0",
        "lxml>=5.0.0",
        "urllib3>=2.0.0",
        "colorlog>=6.8.0",
        "tqdm>=4.66.0",
        "flask>=3.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "terabox-manifest=terabox_manifest.cli:main",
        ],
    },
)
