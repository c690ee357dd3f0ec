from setuptools import setup, find_packages

setup(
    name="sudoku-rater",
    version="1.0.0",
    description="Human-like Sudoku Solver, Difficulty Rater & Puzzle Generator",
    author="robomotic",
    packages=find_packages(include=["sudoku_rater", "sudoku_rater.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.21.0",
        "matplotlib>=3.5.0",
        "seaborn>=0.11.0",
        "tqdm>=4.62.0",
    ],
    extras_require={
        "dev": ["pytest>=7.0.0"],
    },
    entry_points={
        "console_scripts": [
            "sudoku-rater=sudoku_rater.cli:main",
        ],
    },
)
