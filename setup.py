from pathlib import Path

from setuptools import find_packages, setup

ROOT = Path(__file__).parent
README = (ROOT / "README.md").read_text(encoding="utf-8") if (ROOT / "README.md").exists() else ""

setup(
    name="pypixbuf",
    version="0.1.0",
    description="In-memory 8-bit pixel buffers with clamped arithmetic, threshold masks and a raw binary format",
    long_description=README,
    long_description_content_type="text/markdown",
    author="pypixbuf Contributors",
    packages=find_packages(exclude=("tests", "tests.*", "tools", "tools.*", "examples", "examples.*")),
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.19",
        "Pillow>=8.0.0",
    ],
    extras_require={
        "yaml": [
            "PyYAML>=5.4",
        ],
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black>=23.0.0",
            "isort>=5.12.0",
            "flake8>=6.0.0",
            "mypy>=1.0.0",
        ],
        "all": [
            "pypixbuf[yaml,dev]",
        ],
    },
    include_package_data=True,
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia :: Graphics",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    keywords=[
        "image",
        "pixel-buffer",
        "numpy",
        "thresholding",
        "serialization",
    ],
    entry_points={
        "console_scripts": [
            "pypixbuf=pypixbuf.cli:main",
        ],
    },
)
