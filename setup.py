"""
Setup script for claimcheck.

claimcheck is the claim-selection engine behind a truth-judgement quiz.
It serves three roles:

1. Library - Duplicate-free, unseen-first claim selection for quiz rounds
2. Catalog tooling - Load and inspect claim catalogs
3. Terminal companion - Preview selections and exposure statistics

The 'claimcheck' command is the primary entry point.
"""

from setuptools import find_packages, setup

setup(
    name="claimcheck",
    version="1.0.0",
    description="Claim-pool selection engine for truth-judgement quizzes",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    author="claimcheck contributors",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"claimcheck.catalog": ["data/*.json"]},
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        # CLI
        "typer>=0.9.0",
        "rich>=13.0.0",
        # Config & Validation
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        # Logging
        "loguru>=0.7.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "ruff>=0.1.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "claimcheck=claimcheck.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
        "Topic :: Education :: Computer Aided Instruction (CAI)",
    ],
    keywords="quiz education media-literacy claims selection",
)
