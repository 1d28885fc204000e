import os

from setuptools import find_packages, setup

setup(
    name="sibyl",
    version="0.1.0",
    packages=find_packages(include=["sibyl", "sibyl.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=2.10.6,<3.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "hypothesis>=6.90",
        ],
    },
    author="Sibyl Contributors",
    description="Composable runtime validators that report every violation with its exact path",
    long_description=open("README.md").read() if os.path.exists("README.md") else "",
    long_description_content_type="text/markdown",
)
