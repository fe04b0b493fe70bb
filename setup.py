from setuptools import find_packages, setup

setup(
    name="addresses",
    version="0.1.0",
    packages=find_packages(include=["addresses", "addresses.*"], exclude=["addresses.tests"]),
    package_data={"addresses.data": ["*.csv"]},
    python_requires=">=3.9",
    install_requires=[
        "sqlalchemy>=1.4",
        "click>=8.0",
        "python-dotenv",
        "pandas"
    ],
    extras_require={
        "postgres": ["psycopg[binary]"],
        "dev": ["pytest"],
    },
    entry_points={
        "console_scripts": ["addresses=addresses.cli.main:cli"],
    },
)
