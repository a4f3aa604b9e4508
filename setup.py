from pathlib import Path

from setuptools import find_packages, setup  # isort: skip


HERE = Path(__file__).resolve().parent


def get_version():
    # type: () -> str
    """Read the version without importing the package (its dependencies may not be installed yet)."""
    namespace = {}  # type: dict
    exec((HERE / "tracebridge" / "_version.py").read_text(), namespace)
    return namespace["__version__"]


def get_long_description():
    # type: () -> str
    readme = HERE / "README.md"
    return readme.read_text() if readme.exists() else ""


setup(
    name="tracebridge",
    version=get_version(),
    description="Outbound HTTP instrumentation: spans, trace propagation and breadcrumbs for HTTP clients",
    long_description=get_long_description(),
    long_description_content_type="text/markdown",
    license="BSD-3-Clause",
    packages=find_packages(exclude=["tests*"]),
    package_data={
        "tracebridge": ["py.typed"],
    },
    zip_safe=False,
    python_requires=">=3.8",
    install_requires=[
        "attrs>=21.3.0",
        "pydantic>=2.0",
        "pydantic-settings>=2.7",
        "typing_extensions>=4.0",
        "wrapt>=1.14",
    ],
    extras_require={
        "requests": ["requests>=2.20"],
        "httpx": ["httpx>=0.23"],
        "aiohttp": ["aiohttp>=3.8"],
        "test": [
            "aiohttp>=3.8",
            "httpx>=0.23",
            "hypothesis>=6.0",
            "mock>=4.0",
            "pytest>=7.0",
            "pytest-asyncio>=0.21",
            "requests>=2.20",
        ],
    },
    classifiers=[
        "Programming Language :: Python",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
    ],
)
