"""Packaging for the SAM orchestrator

    pip install -e .            # editable install (API + CLI)
    pip install -e ".[test]"    # plus the unit test toolchain

Packages live under backend/: orchestration (dispatch core), app (API,
specialists, settings) and cli (terminal client).
"""

from pathlib import Path

from setuptools import find_packages, setup

ROOT = Path(__file__).parent


def read_requirements(path: Path):
    """Requirement specifiers from a pip requirements file."""
    if not path.exists():
        return []
    lines = (line.split("#", 1)[0].strip() for line in path.read_text(encoding="utf-8").splitlines())
    return [line for line in lines if line]


readme = ROOT / "README.md"

setup(
    name="sam-orchestrator",
    version="1.0.0",
    description="Orchestrator-worker dispatch core for the SAM sales assistant",
    long_description=readme.read_text(encoding="utf-8") if readme.exists() else "",
    long_description_content_type="text/markdown",
    author="SAM Team",
    package_dir={"": "backend"},
    packages=find_packages(where="backend", exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=read_requirements(ROOT / "backend" / "requirements.txt"),
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
        ],
        "dev": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
            "black>=24.0.0",
            "flake8>=7.0.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "sam-orchestrator=cli.__main__:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Framework :: FastAPI",
        "Topic :: Office/Business",
        "Topic :: Scientific/Engineering :: Artificial Intelligence",
        "Programming Language :: Python :: 3",
    ],
    keywords="sales assistant multi-agent orchestrator fastapi",
)
