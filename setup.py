"""
Setup script for dailybias.

dailybias is the learning scheduler behind a daily cognitive-bias
learning habit. It provides three engines:

1. Daily Selection - One personalized bias per calendar day
2. Spaced Repetition - Review scheduling on a 1/3/7/14/30 day ladder
3. Quiz Sessions - Multiple-choice "which bias is this?" assessments

The 'dailybias' command previews what the scheduler would show for a
given catalog and progress file.
"""

from setuptools import find_packages, setup

setup(
    name="dailybias",
    version="0.1.0",
    description="Learning scheduler for cognitive biases: daily selection, spaced repetition and quizzes",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    packages=find_packages(include=["dailybias", "dailybias.*"]),
    python_requires=">=3.10",
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
            "dailybias=dailybias.cli.main:run",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Environment :: Console",
        "Intended Audience :: Education",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
        "Topic :: Education :: Computer Aided Instruction (CAI)",
    ],
    keywords="learning spaced-repetition cognitive-bias quiz cli",
)
