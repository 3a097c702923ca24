"""
Setup script for the vccli package.

This setup script is used for local development and testing.
"""

from setuptools import setup, find_packages

setup(
    name="vccli",
    version="0.1.0",
    description="vCenter REST API client with transparent session management",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.10",
    install_requires=[
        "pyyaml",
        "requests>=2.31.0",
        "pydantic>=2.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black",
            "isort",
            "pylint",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
    ],
)
