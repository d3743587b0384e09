import re
from pathlib import Path

from setuptools import setup, find_packages

# Version is parsed from media_source/__init__.py
__version__ = re.search(
    r'__version__ = "([^"]+)"',
    (Path(__file__).parent / "media_source" / "__init__.py").read_text(),
).group(1)

setup(
    name="media-source",
    version=__version__,
    description="Typed media sources over files, memory, network URLs and asset bundles",
    author="Your Name",
    packages=find_packages(include=["media_source", "media_source.*"]),
    install_requires=[
        "Pillow>=10.1.0",
        "pydantic>=2.5.0",
        "pydantic-settings>=2.1.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.23.0",
        ],
    },
    python_requires=">=3.10",
)
