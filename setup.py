"""setuptools setup for FitQuest.

Install for development:
    pip install -e ".[test]"
"""

from setuptools import setup, find_packages

setup(
    name="FitQuest",
    version="0.1.0",
    packages=find_packages(include=["fitquest", "fitquest.*"]),
    python_requires=">=3.10",
    install_requires=[
        "PyQt6",
        "SQLAlchemy>=2.0",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["fitquest=fitquest.__main__:main"],
    },
)
