"""Setup configuration for nodepinger."""

from setuptools import setup, find_packages

setup(
    name="nodepinger",
    version="1.0.0",
    description="Periodic node liveness pinger for bearer-token accounts",
    author="Your Name",
    packages=find_packages(include=["nodepinger", "nodepinger.*"]),
    install_requires=[
        "click>=8.1.7",
        "pydantic>=2.5.0",
        "pydantic-settings>=2.1.0",
        "requests>=2.31.0",
        "loguru>=0.7.2",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
        ],
    },
    entry_points={
        "console_scripts": [
            "nodepinger=nodepinger.cli:cli",
        ],
    },
    python_requires=">=3.8",
)
