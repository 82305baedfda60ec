"""
Setup script for String Searcher
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README for long description
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text() if readme_file.exists() else ""

setup(
    name="string-searcher",
    version="0.1.0",
    description="Parallel line-oriented substring search over files and directory trees",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["string_searcher", "string_searcher.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Environment :: Console",
        "Topic :: Text Processing :: Filters",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.9",
    install_requires=[
        "pydantic>=2.0",
        "click>=8.0",
        "psutil>=5.9",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "string-search=string_searcher.cli:main",
        ],
    },
)
