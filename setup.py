from setuptools import setup, find_packages

setup(
    name="bond_valuation_engine",
    version="0.1.0",
    description="Static and Monte Carlo bond valuation against a yield curve",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "numpy",
        "pandas",
        "scipy",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "bond-valuation=bond_valuation_engine.cli:main",
        ],
    },
    python_requires=">=3.8",
)
