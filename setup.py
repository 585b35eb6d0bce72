from setuptools import setup, find_packages

setup(
    name="bond_yield_engine",
    version="1.0.0",
    description="Bond yield to maturity, current yield and coupon schedule engine",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "numpy",
        "pandas",
        "pydantic>=2",
        "pydantic-settings",
        "fastapi",
        "uvicorn",
    ],
    extras_require={
        "test": [
            "pytest",
            "scipy",
            "httpx",
        ],
    },
    entry_points={
        "console_scripts": [
            "bond-yield=bond_yield_engine.cli:main",
            "bond-yield-api=bond_yield_engine.api:main",
        ],
    },
    python_requires=">=3.8",
)
