import os

from setuptools import find_packages, setup

setup(
    name="stickler",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=2.10.6,<3.0.0",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    author="Stickler Contributors",
    description="Composable validators for scalars, sequences and nested objects",
    long_description=open("README.md").read()
    if os.path.exists("README.md")
    else "",
    long_description_content_type="text/markdown",
)
