# setup.py
from setuptools import find_packages, setup

setup(
    name="koko-pic-api",
    version="0.1.0",
    packages=find_packages(include=["app", "app.*"]),
    python_requires=">=3.11",
    install_requires=[
        "fastapi>=0.110",
        "sqlalchemy[asyncio]>=2.0",
        "asyncpg>=0.29",
        "pydantic[email]>=2.5",
        "pydantic-settings>=2.1",
        "structlog>=24.1",
        "sentry-sdk>=1.40",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
            "httpx>=0.27",
            "aiosqlite>=0.20",
        ],
    },
)
