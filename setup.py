from setuptools import find_packages, setup

setup(
    name="urlmapping",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*", "examples", "examples.*"]),
    install_requires=["uvicorn", "uvloop", "orjson", "click"],
    extras_require={
        "test": ["pytest", "pytest-asyncio", "pytest-mock"],
    },
    entry_points={
        "console_scripts": [
            "urlmapping = urlmapping.main:main",
        ],
    },
    python_requires=">=3.10",
    description="Declarative URL pattern routing with typed path variables for ASGI applications",
)
