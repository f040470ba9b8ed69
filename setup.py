#!/usr/bin/env python
"""
Setup script for the zendeskapi package.
"""

import os
import re
from setuptools import setup, find_packages


# Read the version from zendeskapi/__init__.py
with open(os.path.join("zendeskapi", "__init__.py"), "r", encoding="utf-8") as f:
    version_match = re.search(r"^__version__ = ['\"]([^'\"]*)['\"]", f.read(), re.M)
    if version_match:
        version = version_match.group(1)
    else:
        raise RuntimeError("Unable to find version string.")

# Read the long description from README.md
with open("README.md", "r", encoding="utf-8") as f:
    long_description = f.read()

# Read requirements from requirements.txt
with open("requirements.txt", "r", encoding="utf-8") as f:
    requirements = [line.strip() for line in f if line.strip() and not line.startswith("#")]

setup(
    name="zendeskapi",
    version=version,
    description="Async Zendesk API client with rate limit aware search, pagination and bulk job polling",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="Roo",
    author_email="noreply@example.com",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    python_requires=">=3.8",
    install_requires=requirements,
    extras_require={
        "dev": [
            "black>=23.3.0",
            "isort>=5.12.0",
            "flake8>=6.0.0",
            "flake8-bugbear>=23.5.9",
            "mypy>=1.3.0",
            "pytest>=7.3.1",
            "pytest-cov>=4.1.0",
            "pytest-asyncio>=0.21.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "zendeskapi=zendeskapi.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Framework :: AsyncIO",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    keywords="zendesk, api client, asyncio, aiohttp, search, pagination, rate limiting",
)
