"""
Setup script for wordgym.

wordgym is a vocabulary trainer whose games (multiple choice, typing,
scramble, dictation, listening, true/false, fill-in-the-blank, speed and
memory chain) all run on one session engine with a fixed-interval review
scheduler and a typo-tolerant answer matcher.

The 'wordgym' command is a small terminal front end over a JSON word file.
"""

from setuptools import find_packages, setup

setup(
    name="wordgym",
    version="1.0.0",
    description="Vocabulary games on a shared session engine with spaced review",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    packages=find_packages(include=["wordgym", "wordgym.*"]),
    python_requires=">=3.11",
    install_requires=[
        # CLI
        "typer>=0.9.0",
        "rich>=13.0.0",
        # Config & Validation
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        # Logging
        "loguru>=0.7.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "ruff>=0.1.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "wordgym=wordgym.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
        "Topic :: Education :: Computer Aided Instruction (CAI)",
    ],
    keywords="vocabulary spaced-repetition flashcards cli education",
)
