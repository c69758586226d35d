from setuptools import setup, find_packages

setup(
    name="cashflow_engine",
    version="0.1.0",
    description="Loan and lease cash flow engine: solve unknown values and implicit rates",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "numpy",
        "pandas",
    ],
    extras_require={
        "test": [
            "pytest",
            "scipy",
        ],
    },
    python_requires=">=3.8",
)
