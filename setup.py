"""
Setup script for the MorphQL Python client
"""

from setuptools import find_packages, setup

with open("README.md", encoding="utf-8") as fh:
    long_description = fh.read()

with open("requirements.txt", encoding="utf-8") as fh:
    requirements = [
        line.strip() for line in fh if line.strip() and not line.startswith("#")
    ]

setup(
    name="morphql",
    version="0.1.0",
    description="A Python client for MorphQL: transform data with declarative queries",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/Hyperwindmill/morphql",
    package_dir={"": "src"},
    packages=find_packages("src"),
    package_data={"morphql": ["bin/*"]},
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.13",
    ],
    python_requires=">=3.11",
    install_requires=requirements,
    extras_require={"test": ["pytest>=8.0"]},
)
