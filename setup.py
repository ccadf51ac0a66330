from setuptools import setup, find_packages

setup(
    name="relay_bundle",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "strawberry-graphql[fastapi]>=0.220.0,<0.292",
        "graphql-core<3.3",
        "fastapi>=0.109.2,<0.137",
        "uvicorn>=0.27.1",
        "sqlalchemy[asyncio]>=2.0.27",
        "asyncpg>=0.29.0",
        "python-dotenv>=1.0.1",
        "pydantic>=2.6.1",
        "pydantic-settings>=2.1.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0.0",
        ],
    },
)
